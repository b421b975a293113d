from gitwrap.cli import main

main()
