from phish_email_risk_engine.domain.email.headers import parse_headers


def test_parse_headers_lowercases_names_and_trims_values():
    headers = parse_headers("Subject:   Hello there  \nX-Mailer: Thing\n")
    assert headers == {"subject": "Hello there", "x-mailer": "Thing"}


def test_parse_headers_unfolds_continuation_lines_with_single_space():
    raw = (
        "Authentication-Results: mx.example.com;\r\n"
        "\tspf=pass smtp.mailfrom=bank.com;\r\n"
        "    dmarc=fail header.from=bank.com\r\n"
        "Subject: Statement\r\n"
    )
    headers = parse_headers(raw)
    assert headers["authentication-results"] == (
        "mx.example.com; spf=pass smtp.mailfrom=bank.com; dmarc=fail header.from=bank.com"
    )
    assert headers["subject"] == "Statement"


def test_parse_headers_ignores_malformed_lines_and_their_continuations():
    raw = "this is not a header\n  still not one\nFrom: a@b.com\n"
    assert parse_headers(raw) == {"from": "a@b.com"}


def test_parse_headers_empty_or_missing_input_yields_empty_mapping():
    assert parse_headers("") == {}
    assert parse_headers(None) == {}


def test_parse_headers_repeated_header_keeps_last_value():
    headers = parse_headers("Received: first hop\nReceived: second hop\n")
    assert headers["received"] == "second hop"
