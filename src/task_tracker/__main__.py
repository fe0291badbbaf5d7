"""Entry point for `python -m task_tracker`."""

from task_tracker.cli.main import main

if __name__ == "__main__":
    main()
