from testrail_mcp.cli import main

main()
