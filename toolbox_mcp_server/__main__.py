from toolbox_mcp_server.cli import main

main()
