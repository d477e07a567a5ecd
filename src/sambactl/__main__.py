from sambactl.cli import main

main()
