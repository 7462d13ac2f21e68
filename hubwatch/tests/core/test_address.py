"""Tests for local address resolution."""

import pytest

from hubwatch.core.address import InterfaceAddress, LocalAddressResolver
from hubwatch.core.errors import AddressResolutionError, ConfigurationError
from hubwatch.core.models import RuntimeEnvironment


def interfaces(*entries):
    """Build an enumerator returning the given (family, address) pairs."""
    calls = []

    def enumerate_interfaces():
        calls.append(1)
        return [
            InterfaceAddress(interface=f"eth{i}", family=family, address=address)
            for i, (family, address) in enumerate(entries)
        ]

    enumerate_interfaces.calls = calls  # type: ignore[attr-defined]
    return enumerate_interfaces


class TestLocalAddressResolver:
    """Tests for LocalAddressResolver."""

    def test_ip_override_is_used_verbatim(self):
        enumerator = interfaces(("IPv4", "192.168.1.5"))
        resolver = LocalAddressResolver(
            RuntimeEnvironment(ip_override="10.9.9.9"), enumerator
        )
        assert resolver.resolve() == "10.9.9.9"
        assert enumerator.calls == []

    def test_skips_loopback_and_ipv6(self):
        resolver = LocalAddressResolver(
            RuntimeEnvironment(name="production"),
            interfaces(
                ("IPv4", "127.0.0.1"),
                ("IPv6", "fe80::1"),
                ("IPv4", "172.16.0.4"),
            ),
        )
        assert resolver.resolve() == "172.16.0.4"

    def test_development_prefers_ten_network(self):
        resolver = LocalAddressResolver(
            RuntimeEnvironment(name="development"),
            interfaces(("IPv4", "192.168.1.5"), ("IPv4", "10.1.2.3")),
        )
        assert resolver.resolve() == "10.1.2.3"

    def test_development_falls_back_to_first_candidate(self):
        resolver = LocalAddressResolver(
            RuntimeEnvironment(name="development"),
            interfaces(("IPv4", "192.168.1.5"), ("IPv4", "172.16.0.4")),
        )
        assert resolver.resolve() == "192.168.1.5"

    def test_other_environments_keep_first_candidate(self):
        resolver = LocalAddressResolver(
            RuntimeEnvironment(name="test"),
            interfaces(("IPv4", "192.168.1.5"), ("IPv4", "10.1.2.3")),
        )
        assert resolver.resolve() == "192.168.1.5"

    def test_no_candidate_raises_configuration_error(self):
        resolver = LocalAddressResolver(
            RuntimeEnvironment(),
            interfaces(("IPv4", "127.0.0.1"), ("IPv6", "::1")),
        )
        with pytest.raises(AddressResolutionError, match="IP environment variable"):
            resolver.resolve()

    def test_resolution_error_is_a_configuration_error(self):
        assert issubclass(AddressResolutionError, ConfigurationError)

    def test_result_is_cached(self):
        enumerator = interfaces(("IPv4", "10.1.2.3"))
        resolver = LocalAddressResolver(RuntimeEnvironment(), enumerator)

        assert resolver.resolve() == "10.1.2.3"
        assert resolver.resolve() == "10.1.2.3"
        assert len(enumerator.calls) == 1

    def test_reset_forces_rescan(self):
        enumerator = interfaces(("IPv4", "10.1.2.3"))
        resolver = LocalAddressResolver(RuntimeEnvironment(), enumerator)

        resolver.resolve()
        resolver.reset()
        resolver.resolve()
        assert len(enumerator.calls) == 2

    def test_invalid_addresses_are_skipped(self):
        resolver = LocalAddressResolver(
            RuntimeEnvironment(),
            interfaces(("IPv4", "not-an-ip"), ("IPv4", "0.0.0.0"), ("IPv4", "10.0.0.7")),
        )
        assert resolver.resolve() == "10.0.0.7"
