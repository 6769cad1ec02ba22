from types import SimpleNamespace

import dns.exception
import dns.name
import dns.resolver
import pytest

from rdns_filter.exceptions import ConfigurationError
from rdns_filter.resolver import build_resolver, lookup_addr


def ptr(name):
    return SimpleNamespace(target=dns.name.from_text(name))


def test_build_resolver_with_nameservers_and_timeout():
    resolver = build_resolver(["1.1.1.1", "1.0.0.1"], timeout=1.6)
    assert len(resolver.nameservers) == 2
    assert resolver.timeout == 1.6
    assert resolver.lifetime == 1.6


def test_build_resolver_rejects_bad_nameserver():
    with pytest.raises(ConfigurationError):
        build_resolver(["not-a-server"])


def test_build_resolver_without_system_config(monkeypatch):
    def no_config(self, *args, **kwargs):
        raise dns.resolver.NoResolverConfiguration("cannot open /etc/resolv.conf")

    monkeypatch.setattr(dns.resolver.Resolver, "read_resolv_conf", no_config)
    with pytest.raises(ConfigurationError):
        build_resolver()


def test_lookup_addr_queries_reverse_name(monkeypatch):
    resolver = build_resolver(["1.1.1.1"])
    calls = []

    def fake_resolve(qname, rdtype):
        calls.append((str(qname), rdtype))
        return [ptr("dns.google."), ptr("other.example.")]

    monkeypatch.setattr(resolver, "resolve", fake_resolve)

    assert lookup_addr("8.8.8.8", resolver) == ["dns.google.", "other.example."]
    assert calls == [("8.8.8.8.in-addr.arpa.", "PTR")]


def test_lookup_addr_propagates_nxdomain(monkeypatch):
    resolver = build_resolver(["1.1.1.1"])

    def fake_resolve(qname, rdtype):
        raise dns.resolver.NXDOMAIN()

    monkeypatch.setattr(resolver, "resolve", fake_resolve)
    with pytest.raises(dns.exception.DNSException):
        lookup_addr("10.0.0.1", resolver)


def test_lookup_addr_bad_address(monkeypatch):
    resolver = build_resolver(["1.1.1.1"])
    monkeypatch.setattr(resolver, "resolve", lambda *a: pytest.fail("resolve must not be called"))
    with pytest.raises(dns.exception.DNSException):
        lookup_addr("not-an-ip", resolver)
