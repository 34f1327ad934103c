"""Email Address Checks

Two conjunctive checks: the address grammar (email-validator, offline) and
the domain's mail exchangers (dnspython). The DNS side sits behind the
MxResolver protocol so the engine can be given a resolver per deployment.
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import dns.resolver
from email_validator import EmailNotValidError, validate_email

from formcheck.core.config import settings
from formcheck.core.errors import AppError, DnsErrorMapper, Err, Ok, Result, raise_result
from formcheck.core.logging import dns_logger

log = dns_logger()


def has_valid_grammar(value: Any) -> bool:
    """Whole value is a single well-formed address. No network access."""
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def domain_of(value: Any) -> str:
    """Last segment after '@' ('' for missing values)."""
    text = "" if value is None else str(value)
    return text.split("@")[-1]


@runtime_checkable
class MxResolver(Protocol):
    """Answers whether a domain publishes at least one MX record.

    Implementations raise AppErrorException when the question cannot be
    answered (resolver unreachable), and return False only for a definitive
    "no MX".
    """

    def has_mx(self, domain: str) -> bool: ...


class DnsMxResolver:
    """MxResolver backed by dnspython."""

    __slots__ = ("_resolver",)

    def __init__(
        self,
        nameservers: list[str] | None = None,
        timeout: float | None = None,
        lifetime: float | None = None,
    ):
        nameservers = nameservers if nameservers is not None else settings.DNS_NAMESERVERS
        self._resolver = dns.resolver.Resolver(configure=not nameservers)
        if nameservers:
            self._resolver.nameservers = list(nameservers)
        self._resolver.timeout = timeout if timeout is not None else settings.DNS_TIMEOUT
        self._resolver.lifetime = lifetime if lifetime is not None else settings.DNS_LIFETIME

    def lookup(self, domain: str) -> Result[bool, AppError]:
        """Ok(True/False) for a definitive answer, Err for resolver faults."""
        mapper = DnsErrorMapper(domain, origin="dns.mx_lookup")
        try:
            answer = self._resolver.resolve(domain, "MX")
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer, dns.resolver.YXDOMAIN):
            log.debug("mx_absent", domain=domain)
            return Ok(False)
        except mapper.catches as e:
            error = mapper.map_exception(e)
            log.warning("mx_lookup_failed", domain=domain, code=error.code.name, reason=error.message)
            return Err(error)
        found = len(answer) > 0
        log.debug("mx_resolved", domain=domain, records=len(answer))
        return Ok(found)

    def has_mx(self, domain: str) -> bool:
        return raise_result(self.lookup(domain))
