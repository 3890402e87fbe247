"""Interactive console: argument parsing, dispatch, phases and the session loop."""
