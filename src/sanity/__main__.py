from sanity.cli import main

main()
