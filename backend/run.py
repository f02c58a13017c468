#!/usr/bin/env python3
"""
Entry point for running the Expense Tracker server.

Usage:
    python run.py [--port PORT] [--host HOST] [--memory] [--sample-data]
"""

import argparse
import logging
import os
import webbrowser
import qrcode
import uvicorn

from tracker.config import get_settings


def print_qr_code(url: str) -> None:
    """Print a QR code to the terminal."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=1,
        border=1,
    )
    qr.add_data(url)
    qr.make(fit=True)

    # Print QR code using ASCII
    qr.print_ascii(invert=True)


def main():
    parser = argparse.ArgumentParser(description="Expense Tracker")
    parser.add_argument("--port", type=int, default=8000, help="Port to run on")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--no-browser", action="store_true", help="Don't open browser")
    parser.add_argument("--memory", action="store_true", help="Keep expenses in memory only")
    parser.add_argument("--sample-data", action="store_true", help="Seed demo expenses")
    args = parser.parse_args()

    # The server re-reads settings from the environment in its own process
    if args.memory:
        os.environ["TRACKER_STORAGE"] = "memory"
    if args.sample_data:
        os.environ["TRACKER_SAMPLE_DATA"] = "1"

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    url = f"http://{args.host}:{args.port}"

    print("\n" + "=" * 50)
    print("  Expense Tracker")
    print("=" * 50)
    print(f"\n  URL: {url}/docs")
    print(f"  Storage: {settings.storage}\n")

    try:
        print_qr_code(url)
    except Exception:
        logging.getLogger(__name__).debug("QR code unavailable", exc_info=True)

    print("\n  Press Ctrl+C to stop the server\n")
    print("=" * 50 + "\n")

    if not args.no_browser:
        webbrowser.open(f"{url}/docs")

    uvicorn.run(
        "tracker.main:app",
        host=args.host,
        port=args.port,
        reload=not args.memory,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
