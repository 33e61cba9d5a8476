"""Command line entry point: ``upshare [port]``"""

import argparse
import logging
import sys

from .discovery import get_interface_ip, print_qr_code, register_mdns, unregister_mdns
from .errors import ConfigCorrupt
from .server import create_app

logger = logging.getLogger('upshare')

DEFAULT_PORT = 3000
DEFAULT_HOST = '0.0.0.0'


def parse_port(value):
    """Port number from the command line, DEFAULT_PORT if it is not usable"""
    try:
        port = int(value)
    except (TypeError, ValueError):
        return DEFAULT_PORT
    if not 0 < port < 65536:
        return DEFAULT_PORT
    return port


def build_parser():
    parser = argparse.ArgumentParser(prog='upshare', description='Minimal HTTP file upload server')
    parser.add_argument('port', nargs='?', help=f'port to listen on (default {DEFAULT_PORT})')
    parser.add_argument('--root', help='directory holding config.json and the uploads (default: current directory)')
    parser.add_argument('--host', default=DEFAULT_HOST, help=f'address to bind (default {DEFAULT_HOST})')
    parser.add_argument('--no-qr', action='store_true', help='do not print the QR code')
    parser.add_argument('--mdns', action='store_true', help='advertise the server over mDNS/Bonjour')
    return parser


def print_banner(app, port, local_ip):
    print("\n" + "=" * 50)
    print("  📁 UPSHARE")
    print("=" * 50)
    print(f"\n  Local URL:   http://localhost:{port}")
    print(f"  Network URL: http://{local_ip}:{port}")
    print(f"\n  Uploads saved to: {app.config['UPLOAD_FOLDER']}")
    print(f"  Configuration:    {app.config['CONFIG_PATH']}")
    print("=" * 50 + "\n")


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    port = parse_port(args.port)
    try:
        app = create_app(args.root)
    except ConfigCorrupt as e:
        logger.error('Cannot start, configuration is corrupt: %s', e)
        return 1

    local_ip = get_interface_ip()
    print_banner(app, port, local_ip)
    if not args.no_qr:
        print_qr_code(f"http://{local_ip}:{port}")

    registration = register_mdns(port, local_ip) if args.mdns else None
    try:
        app.run(host=args.host, port=port, debug=False, threaded=True)
    finally:
        unregister_mdns(registration)
    return 0


if __name__ == '__main__':
    sys.exit(main())
