import io
import logging
from types import SimpleNamespace

from upshare import discovery


def ipv4(address):
    return SimpleNamespace(ip=address, is_IPv4=True)


def ipv6(address):
    return SimpleNamespace(ip=(address, 0, 0), is_IPv4=False)


def adapter(name, *ips, nice_name=None):
    return SimpleNamespace(name=name, nice_name=nice_name or name, ips=list(ips))


def test_prefers_wifi_interface():
    adapters = [
        adapter('lo', ipv4('127.0.0.1')),
        adapter('eth0', ipv4('10.0.0.5')),
        adapter('wlan0', ipv6('fe80::1'), ipv4('192.168.1.20')),
    ]
    assert discovery.get_interface_ip(adapters) == '192.168.1.20'


def test_matches_nice_name():
    adapters = [
        adapter('eth0', ipv4('10.0.0.5')),
        adapter('{6B29FC40-CA47}', ipv4('192.168.1.30'), nice_name='Wi-Fi'),
    ]
    assert discovery.get_interface_ip(adapters) == '192.168.1.30'


def test_falls_back_to_first_external_address():
    adapters = [
        adapter('lo', ipv4('127.0.0.1')),
        adapter('wlan0', ipv6('fe80::1')),
        adapter('eth0', ipv4('10.0.0.5')),
    ]
    assert discovery.get_interface_ip(adapters) == '10.0.0.5'


def test_wildcard_when_nothing_qualifies():
    assert discovery.get_interface_ip([adapter('lo', ipv4('127.0.0.1'))]) == '0.0.0.0'
    assert discovery.get_interface_ip([]) == '0.0.0.0'


def test_uses_ifaddr_by_default(monkeypatch):
    monkeypatch.setattr(discovery.ifaddr, 'get_adapters', lambda: [adapter('en0', ipv4('172.16.0.2'))])
    assert discovery.get_interface_ip() == '172.16.0.2'


def test_print_qr_code():
    out = io.StringIO()
    discovery.print_qr_code('http://192.168.1.20:3000', out=out)
    assert len(out.getvalue().splitlines()) > 10


def test_print_qr_code_failure_is_logged(monkeypatch, caplog):
    def broken(*args, **kwargs):
        raise RuntimeError('no terminal')

    monkeypatch.setattr(discovery.qrcode.QRCode, 'print_ascii', broken)
    with caplog.at_level(logging.ERROR, logger='upshare.discovery'):
        discovery.print_qr_code('http://192.168.1.20:3000', out=io.StringIO())

    assert 'Error generating QR code' in caplog.text


def test_register_mdns_skips_wildcard():
    assert discovery.register_mdns(3000, '0.0.0.0') is None
    discovery.unregister_mdns(None)
