from mcp_client_cli.ui.cli.app import main

if __name__ == "__main__":
    raise SystemExit(main())
