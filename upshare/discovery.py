"""Make the server easy to reach from other devices on the network"""

import ipaddress
import logging
import socket

import ifaddr
import qrcode
from zeroconf import ServiceInfo, Zeroconf

logger = logging.getLogger(__name__)

# Common Wi-Fi interface names across different operating systems
WIFI_INTERFACE_NAMES = ('Wi-Fi', 'wlan0', 'en0')
FALLBACK_ADDRESS = '0.0.0.0'


def _external_ipv4(adapter):
    for ip in adapter.ips:
        if ip.is_IPv4 and not ipaddress.ip_address(ip.ip).is_loopback:
            yield ip.ip


def get_interface_ip(adapters=None):
    """Get the LAN facing IPv4 address, preferring Wi-Fi interfaces"""
    if adapters is None:
        adapters = ifaddr.get_adapters()

    for wanted in WIFI_INTERFACE_NAMES:
        for adapter in adapters:
            if wanted in (adapter.name, adapter.nice_name):
                for address in _external_ipv4(adapter):
                    return address

    for adapter in adapters:
        for address in _external_ipv4(adapter):
            return address

    return FALLBACK_ADDRESS


def print_qr_code(data, out=None):
    """Print ``data`` as a QR code on the terminal; failures are only logged"""
    try:
        qr = qrcode.QRCode(border=1)
        qr.add_data(data)
        qr.make(fit=True)
        qr.print_ascii(out=out)
    except Exception:
        logger.exception('Error generating QR code')


def register_mdns(port, ip):
    """Register service for network discovery"""
    if ip == FALLBACK_ADDRESS:
        logger.warning('No network address found, not advertising over mDNS')
        return None

    hostname = socket.gethostname()
    service_info = ServiceInfo(
        "_http._tcp.local.",
        f"upshare ({hostname})._http._tcp.local.",
        addresses=[socket.inet_aton(ip)],
        port=port,
        properties={'path': '/'},
    )

    zeroconf = Zeroconf()
    zeroconf.register_service(service_info)
    print(f"📡 Service registered as 'upshare ({hostname})' on local network")
    return zeroconf, service_info


def unregister_mdns(registration):
    if registration is None:
        return
    zeroconf, service_info = registration
    zeroconf.unregister_service(service_info)
    zeroconf.close()
