"""Unified entry point for DocVault.

This module provides a unified entry point that can start different interfaces:
- REST API server
- CLI interface
"""

import argparse


def main(argv: list[str] | None = None):
    """Main entry point with interface selection."""
    parser = argparse.ArgumentParser(
        description="DocVault - per-project document vaults",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Interfaces:
  api         Start the REST API server
  cli         Run a CLI command (arguments after 'cli' go to the CLI)

Examples:
  python -m docvault api                  # Start API server
  python -m docvault api --port 8080      # Start API on custom port
  python -m docvault cli tree 1           # Show the tree of vault 1
""",
    )

    parser.add_argument(
        "interface",
        choices=["api", "cli"],
        help="Which interface to start",
    )

    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind API server to (default: 127.0.0.1)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for API server (default: 8421)",
    )

    args, rest = parser.parse_known_args(argv)

    if args.interface == "api":
        import uvicorn

        from docvault.core.config import DOCVAULT_HOST, DOCVAULT_PORT, setup_logging

        setup_logging()
        host = args.host or DOCVAULT_HOST or "127.0.0.1"
        port = args.port or DOCVAULT_PORT

        print(f"Starting DocVault API server on {host}:{port}")
        uvicorn.run(
            "docvault.api.app:app",
            host=host,
            port=port,
            reload=False,
        )

    elif args.interface == "cli":
        from docvault.interfaces.cli.app import app

        app(args=rest, prog_name="docvault")


if __name__ == "__main__":
    main()
