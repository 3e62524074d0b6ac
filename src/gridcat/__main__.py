from gridcat.cli import main

main()
