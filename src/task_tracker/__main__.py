from task_tracker.cli.main import main

main()
