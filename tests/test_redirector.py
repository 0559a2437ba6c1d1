from phish_email_risk_engine.config.settings import DEFAULT_SCORING_CONFIG
from phish_email_risk_engine.domain.url.extract import extract_text_links, merge_links
from phish_email_risk_engine.domain.url.models import ExtractedLink
from phish_email_risk_engine.domain.url.normalize import url_host
from phish_email_risk_engine.domain.url.redirect import (
    decode_links,
    decode_redirect_target,
    is_redirector_host,
)

REDIRECTORS = DEFAULT_SCORING_CONFIG.redirector_hosts
PARAMS = DEFAULT_SCORING_CONFIG.redirector_params


def _decode(url: str):
    return decode_redirect_target(url, redirector_hosts=REDIRECTORS, params=PARAMS)


def test_safelinks_target_is_decoded():
    out = _decode("http://nam01.safelinks.protection.outlook.com/?url=http%3A%2F%2Fevil.tld&data=abc")
    assert out.decoded is True
    assert out.url == "http://evil.tld/"


def test_regional_safelinks_host_matches_parent_entry():
    assert is_redirector_host("eur02.safelinks.protection.outlook.com", REDIRECTORS) is True
    assert is_redirector_host("safelinks.protection.outlook.com.evil.tld", REDIRECTORS) is False
    out = _decode("https://eur02.safelinks.protection.outlook.com/?url=https%3A%2F%2Fevil.tld%2Flogin")
    assert out.url == "https://evil.tld/login"


def test_google_redirect_uses_q_parameter():
    out = _decode("https://www.google.com/url?q=https://phish.example/reset&sa=D")
    assert out.url == "https://phish.example/reset"


def test_proofpoint_v2_encoding_is_translated():
    out = _decode("https://urldefense.proofpoint.com/v2/url?u=https-3A__evil.example_login&d=DwMF")
    assert out.decoded is True
    assert out.url == "https://evil.example/login"


def test_non_redirector_is_returned_unchanged():
    out = _decode("https://example.com/?url=https%3A%2F%2Fevil.tld")
    assert out.decoded is False
    assert out.url == "https://example.com/?url=https%3A%2F%2Fevil.tld"


def test_redirector_without_usable_parameter_is_returned_unchanged():
    url = "https://www.google.com/search?q=hello+world"
    out = _decode(url)
    assert out.decoded is False
    assert out.url == url


def test_decoding_is_applied_once_not_recursively():
    wrapped = (
        "https://safelinks.protection.outlook.com/?url="
        "https%3A%2F%2Fwww.google.com%2Furl%3Fq%3Dhttps%3A%2F%2Fevil.tld"
    )
    out = _decode(wrapped)
    assert url_host(out.url) == "www.google.com"


def test_decode_links_sets_target_and_dedupes_by_destination():
    links = merge_links(
        extract_text_links(
            "http://evil.tld/ and http://nam01.safelinks.protection.outlook.com/?url=http%3A%2F%2Fevil.tld",
            redirector_hosts=REDIRECTORS,
        )
    )
    decoded = decode_links(links, redirector_hosts=REDIRECTORS, params=PARAMS)
    assert [link.target for link in decoded] == ["http://evil.tld/"]


def test_decode_links_keeps_pre_decode_href():
    link = ExtractedLink(
        href="http://nam01.safelinks.protection.outlook.com/?url=http%3A%2F%2Fevil.tld",
        origin="anchor",
        shown_text="bank.com",
        is_redirector=True,
    )
    (decoded,) = decode_links([link], redirector_hosts=REDIRECTORS, params=PARAMS)
    assert decoded.href == link.href
    assert decoded.destination == "http://evil.tld/"


def test_decode_links_is_idempotent():
    links = extract_text_links(
        "https://safelinks.protection.outlook.com/?url=https%3A%2F%2Fwww.google.com%2Furl%3Fq%3Dhttps%3A%2F%2Fevil.tld"
        " https://example.com/plain",
        redirector_hosts=REDIRECTORS,
    )
    once = decode_links(links, redirector_hosts=REDIRECTORS, params=PARAMS)
    twice = decode_links(once, redirector_hosts=REDIRECTORS, params=PARAMS)
    assert twice == once


def test_decode_links_keeps_redirector_over_plain_duplicate():
    plain = ExtractedLink(href="http://evil.tld/", origin="text")
    wrapped = ExtractedLink(
        href="http://nam01.safelinks.protection.outlook.com/?url=http%3A%2F%2Fevil.tld",
        origin="anchor",
        shown_text="Sign in",
        is_redirector=True,
    )
    (decoded,) = decode_links([plain, wrapped], redirector_hosts=REDIRECTORS, params=PARAMS)
    assert decoded.is_redirector is True
    assert decoded.href == wrapped.href
    assert decoded.origin == "anchor"
    assert decoded.shown_text == "Sign in"


def test_decode_links_carries_anchor_text_onto_wrapped_text_link():
    wrapped = ExtractedLink(
        href="http://nam01.safelinks.protection.outlook.com/?url=http%3A%2F%2Fevil.tld",
        origin="text",
        is_redirector=True,
    )
    anchor = ExtractedLink(href="http://evil.tld/", origin="anchor", shown_text="www.bank.com")
    (decoded,) = decode_links([wrapped, anchor], redirector_hosts=REDIRECTORS, params=PARAMS)
    assert decoded.is_redirector is True
    assert decoded.origin == "anchor"
    assert decoded.shown_text == "www.bank.com"
    assert decoded.destination == "http://evil.tld/"
