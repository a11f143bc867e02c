from zapctl.cli import main

main()
