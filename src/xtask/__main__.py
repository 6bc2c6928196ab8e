from xtask.main import main

main()
