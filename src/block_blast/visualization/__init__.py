"""pygame front end: renderer and drag controller over engine snapshots."""
