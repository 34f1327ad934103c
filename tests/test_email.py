import dns.exception
import dns.resolver
import pytest

from formcheck.core.errors import AppErrorException, ErrorCode, dns_failure
from formcheck.core.validation import DnsMxResolver, domain_of, has_valid_grammar, messages


def test_email_valid_address_with_mx(make_engine, mx_resolver, error_store):
    engine = make_engine({"email": "user@formcheck.io"})

    assert engine.valid_email("email") is True
    assert mx_resolver.queries == ["formcheck.io"]
    assert error_store.deletes() == ["validator_error_email", "validator_error_"]


def test_email_domain_without_mx_is_invalid(make_engine):
    engine = make_engine({"email": "user@no-mx-here.io"})

    assert engine.valid_email("email") is False
    assert engine.errors["email"] == messages.INVALID_VALUE


@pytest.mark.parametrize("value", ["not-an-email", "user@", "@formcheck.io", "a@b@formcheck.io", None, 42])
def test_email_bad_grammar_skips_dns(make_engine, mx_resolver, value):
    engine = make_engine({"email": value})

    assert engine.valid_email("email") is False
    assert engine.errors["email"] == messages.INVALID_VALUE
    assert mx_resolver.queries == []


def test_email_required_gate(make_engine, mx_resolver):
    engine = make_engine({"email": ""})

    assert engine.valid_email("email", required=True) is False
    assert engine.errors["email"] == messages.REQUIRED
    assert mx_resolver.queries == []


def test_email_confirmation_mismatch(make_engine):
    engine = make_engine({"email": "user@formcheck.io", "email_confirmation": "other@formcheck.io"})

    assert engine.valid_email("email", confirmation="email_confirmation") is False
    assert engine.errors == {"email_confirmation": messages.EMAIL_MISMATCH}


def test_email_confirmation_match_clears_confirmation_only(make_engine, error_store):
    engine = make_engine({"email": "user@formcheck.io", "email_confirmation": "user@formcheck.io"})

    assert engine.valid_email("email", confirmation="email_confirmation") is True
    assert error_store.deletes() == ["validator_error_email_confirmation"]


def test_email_resolver_fault_propagates(make_engine):
    class DownResolver:
        def has_mx(self, domain):
            raise AppErrorException(dns_failure(domain, "timed out").error)

    engine = make_engine({"email": "user@formcheck.io"}, mx_resolver=DownResolver())

    with pytest.raises(AppErrorException) as excinfo:
        engine.valid_email("email")
    assert excinfo.value.error.code is ErrorCode.E1003_DNS_FAILURE
    assert engine.errors == {}


def test_grammar_and_domain_helpers():
    assert has_valid_grammar("first.last+tag@formcheck.io") is True
    assert has_valid_grammar("first last@formcheck.io") is False
    assert domain_of("user@formcheck.io") == "formcheck.io"
    assert domain_of("no-at-sign") == "no-at-sign"
    assert domain_of(None) == ""


# ---------------------------------------------------------------------------
# DnsMxResolver
# ---------------------------------------------------------------------------

@pytest.fixture
def resolver():
    return DnsMxResolver(nameservers=["192.0.2.53"], timeout=0.1, lifetime=0.2)


def _patch_resolve(monkeypatch, outcome):
    def fake_resolve(self, qname, rdtype="A", *args, **kwargs):
        assert rdtype == "MX"
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome
    monkeypatch.setattr(dns.resolver.Resolver, "resolve", fake_resolve)


def test_resolver_finds_mx(monkeypatch, resolver):
    _patch_resolve(monkeypatch, ["10 mx1.formcheck.io."])

    assert resolver.has_mx("formcheck.io") is True


@pytest.mark.parametrize("exc", [dns.resolver.NXDOMAIN(), dns.resolver.NoAnswer()])
def test_resolver_definitive_absence(monkeypatch, resolver, exc):
    _patch_resolve(monkeypatch, exc)

    assert resolver.lookup("nowhere.io").unwrap() is False
    assert resolver.has_mx("nowhere.io") is False


@pytest.mark.parametrize("exc", [dns.exception.Timeout(), dns.resolver.NoNameservers()])
def test_resolver_faults_raise(monkeypatch, resolver, exc):
    _patch_resolve(monkeypatch, exc)

    result = resolver.lookup("formcheck.io")
    assert result.is_err()
    assert result.unwrap_err().code is ErrorCode.E1003_DNS_FAILURE
    assert result.unwrap_err().metadata["domain"] == "formcheck.io"

    with pytest.raises(AppErrorException):
        resolver.has_mx("formcheck.io")
