from block_blast.persistence import BestScoreStore


def test_missing_file_loads_zero(tmp_path):
    assert BestScoreStore(tmp_path / "best.json").load() == 0


def test_round_trip(tmp_path):
    store = BestScoreStore(tmp_path / "nested" / "best.json")
    store.save(1234)
    assert store.load() == 1234


def test_corrupt_file_loads_zero(tmp_path):
    path = tmp_path / "best.json"
    path.write_text("{not json", encoding="utf-8")
    assert BestScoreStore(path).load() == 0
    path.write_text('{"best_score": -3}', encoding="utf-8")
    assert BestScoreStore(path).load() == 0
    path.write_text("[1, 2]", encoding="utf-8")
    assert BestScoreStore(path).load() == 0


def test_huge_integer_loads_exactly(tmp_path):
    path = tmp_path / "best.json"
    huge = int("9" * 400)
    path.write_text('{"best_score": %s}' % ("9" * 400), encoding="utf-8")
    assert BestScoreStore(path).load() == huge
    store = BestScoreStore(tmp_path / "exact.json")
    store.save(2**53 + 1)
    assert store.load() == 2**53 + 1


def test_overflowing_float_loads_zero(tmp_path):
    path = tmp_path / "best.json"
    path.write_text('{"best_score": 1e400}', encoding="utf-8")
    assert BestScoreStore(path).load() == 0
    path.write_text('{"best_score": "%s"}' % ("9" * 400), encoding="utf-8")
    assert BestScoreStore(path).load() == 0
