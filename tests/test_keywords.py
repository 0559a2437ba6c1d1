from phish_email_risk_engine.config.settings import DEFAULT_SCORING_CONFIG
from phish_email_risk_engine.tools.text.text_model import find_suspicious_keywords, normalize_text

KEYWORDS = DEFAULT_SCORING_CONFIG.suspicious_keywords


def test_single_keyword_is_not_flagged():
    scan = find_suspicious_keywords("Your invoice", "Attached for your records.", KEYWORDS)
    assert scan.found == ("invoice",)
    assert scan.multiple is False


def test_two_distinct_keywords_are_flagged_in_list_order():
    scan = find_suspicious_keywords("URGENT", "Please verify your account today.", KEYWORDS)
    assert scan.found == ("urgent", "verify")
    assert scan.multiple is True


def test_repeated_keyword_counts_once():
    scan = find_suspicious_keywords("verify", "verify verify VERIFY", KEYWORDS)
    assert scan.found == ("verify",)
    assert scan.multiple is False


def test_min_hits_is_configurable():
    scan = find_suspicious_keywords("Overdue", "", KEYWORDS, min_hits=1)
    assert scan.multiple is True


def test_normalize_text_collapses_whitespace():
    assert normalize_text("  click \n here\t now ") == "click here now"
