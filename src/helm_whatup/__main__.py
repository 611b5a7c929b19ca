from helm_whatup.cli.app import main

main()
