from metalcloud_cli.main import main

main()
