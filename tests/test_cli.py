import io
import json

from phish_email_risk_engine.cli import build_parser, main, run_once


def _payload(**overrides):
    payload = {
        "from": {"displayName": "Bank Alerts", "emailAddress": "alerts@bank.com"},
        "subject": "Monthly statement",
        "bodyText": "Details at http://bank-security.example/login",
    }
    payload.update(overrides)
    return json.dumps(payload)


def test_run_once_returns_camel_case_json():
    output = json.loads(run_once(_payload()))
    assert set(output) == {"probability", "riskClass", "reasons", "linkDomains", "fromDomain"}
    assert output["probability"] == 30
    assert output["riskClass"] == "low"
    assert output["linkDomains"] == ["bank-security.example"]
    assert output["fromDomain"] == "bank.com"


def test_run_once_with_strict_profile():
    output = json.loads(run_once(_payload(), profile="strict"))
    assert output["riskClass"] == "medium"


def test_main_reads_stdin(capsys):
    code = main([], stdin=io.StringIO(_payload()))
    assert code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["probability"] == 30


def test_main_reads_input_file(tmp_path, capsys):
    path = tmp_path / "message.json"
    path.write_text(_payload(**{"from": None}), encoding="utf-8")
    code = main(["--input", str(path)])
    assert code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["reasons"] == ["Unable to analyze: Missing sender information"]


def test_main_reports_bad_input_as_error(capsys):
    code = main([], stdin=io.StringIO("not a message"))
    assert code == 1
    output = json.loads(capsys.readouterr().out)
    assert output["status"] == "error"
    assert output["message"]


def test_main_reports_missing_file_as_error(tmp_path, capsys):
    code = main(["--input", str(tmp_path / "missing.json")])
    assert code == 1
    assert json.loads(capsys.readouterr().out)["status"] == "error"


def test_log_level_is_case_insensitive():
    args = build_parser().parse_args(["--log-level", "debug"])
    assert args.log_level == "DEBUG"
