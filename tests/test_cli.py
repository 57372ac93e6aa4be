"""Evidence Integrity - CLI Tests"""

import hashlib
import json

from cli import main


class TestCli:
    """Offline CLI commands."""

    def test_canonicalize(self, capsys):
        code = main([
            "canonicalize",
            "--platform", "youtube",
            "--evidence-type", "video",
            "--url", "https://youtu.be/abc12345678",
            "--case-id", "CASE-1",
        ])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["canonical"] == (
            '{"platform":"youtube","evidence_type":"video",'
            '"url":"https://youtu.be/abc12345678","case_id":"CASE-1"}'
        )
        assert data["algorithm"] == "SHA-256"
        assert data["hash"] == hashlib.sha256(data["canonical"].encode("utf-8")).hexdigest()

    def test_digest_text(self, capsys):
        assert main(["digest", "--text", "hello"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["hash"] == hashlib.sha256(b"hello").hexdigest()

    def test_digest_file(self, capsys, tmp_path):
        path = tmp_path / "capture.bin"
        path.write_bytes(b"\x00\x01evidence")
        assert main(["digest", "--file", str(path), "--algorithm", "SHA3-512"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["hash"] == hashlib.sha3_512(b"\x00\x01evidence").hexdigest()

    def test_unknown_algorithm_reports_error(self, capsys):
        code = main(["digest", "--text", "x", "--algorithm", "MD5"])
        assert code == 2
        data = json.loads(capsys.readouterr().out)
        assert data["error"]["kind"] == "validation"

    def test_canonicalize_undecodable_argument(self, capsys):
        code = main([
            "canonicalize",
            "--platform", "youtube",
            "--evidence-type", "video",
            "--url", "https://youtu.be/\udcff",
            "--case-id", "CASE-1",
        ])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["canonical"].endswith('"url":"https://youtu.be/\\udcff","case_id":"CASE-1"}')
        assert data["hash"] == hashlib.sha256(data["canonical"].encode("utf-8")).hexdigest()

    def test_verify_malformed_id(self, capsys):
        assert main(["verify", "not-a-uuid"]) == 2
        data = json.loads(capsys.readouterr().out)
        assert data["error"]["kind"] == "validation"
        assert data["error"]["details"]["field"] == "evidence_id"

    def test_no_command(self, capsys):
        assert main([]) == 1
