from ide_mcp.cli.main import main

main()
