"""Command-line entry point for the RNS dashboard server."""

from rns_dashboard.main import parse_args, run_server


def main():
    """Run the RNS dashboard server."""
    run_server(port=parse_args().port)


if __name__ == "__main__":
    main()
