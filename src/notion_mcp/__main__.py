from notion_mcp.cli import main

main()
