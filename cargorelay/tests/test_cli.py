import json

from cargorelay.cli.main import build_parser, main


def _write(tmp_path, data) -> str:
    p = tmp_path / "submission.json"
    p.write_text(json.dumps(data), encoding="utf-8")
    return str(p)


def test_build_payload_prints_enriched_payload(tmp_path, capsys, sample_submission):
    rc = main(["build-payload", _write(tmp_path, sample_submission)])

    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["cargo_details"]["shipping_category"] == "medium_parcel"
    assert out["metadata"]["data_validation"]["all_valid"] is True


def test_build_payload_rejects_non_object(tmp_path, capsys):
    rc = main(["build-payload", _write(tmp_path, [1, 2])])

    assert rc == 2
    assert "JSON object" in capsys.readouterr().err


def test_forward_command_delivers_once(tmp_path, capsys, mock_webhook, sample_submission):
    rc = main(["forward", _write(tmp_path, sample_submission), "--url", mock_webhook.url])

    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["success"] is True
    assert out["http_code"] == 200
    assert len(mock_webhook.requests) == 1


def test_forward_command_refuses_placeholder_url(tmp_path, capsys, sample_submission):
    rc = main(
        [
            "forward",
            _write(tmp_path, sample_submission),
            "--url",
            "https://your-n8n-domain.com/webhook",
        ]
    )

    assert rc == 2
    assert "not configured" in capsys.readouterr().err


def test_parser_registers_client_commands():
    args = build_parser().parse_args(["client", "--url", "http://relay:8080", "submit", "x.json"])

    assert args.client_cmd == "submit"
    assert args.path == "/webhook/cargo"
