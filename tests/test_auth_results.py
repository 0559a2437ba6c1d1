from phish_email_risk_engine.domain.email.auth import AuthResult, parse_auth_results
from phish_email_risk_engine.domain.email.headers import parse_headers


def test_auth_results_extracts_dmarc_spf_dkim():
    headers = {
        "authentication-results": (
            "mx.example; spf=pass smtp.mailfrom=alerts@bank.com; "
            "dkim=fail header.d=bank.com; dmarc=fail (p=reject)"
        )
    }
    out = parse_auth_results(headers)
    assert out == AuthResult(dmarc="fail", spf="pass", dkim="fail")


def test_received_spf_takes_precedence_over_authentication_results():
    headers = {
        "authentication-results": "mx.example; spf=pass smtp.mailfrom=bank.com",
        "received-spf": "SoftFail (domain of transitioning bank.com does not designate 203.0.113.9)",
    }
    assert parse_auth_results(headers).spf == "softfail"


def test_auth_results_default_to_none_when_absent():
    assert parse_auth_results({}) == AuthResult()


def test_auth_results_unknown_tokens_fall_back_to_none():
    out = parse_auth_results({"authentication-results": "mx; dmarc=temperror; dkim=permerror"})
    assert out.dmarc == "none"
    assert out.dkim == "none"


def test_auth_results_header_names_are_case_insensitive():
    headers = parse_headers("AUTHENTICATION-RESULTS: mx.example; DMARC=FAIL\n")
    assert parse_auth_results(headers).dmarc == "fail"
    assert parse_auth_results({"Authentication-Results": "dkim=fail"}).dkim == "fail"
