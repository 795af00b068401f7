"""Tests for the userlist CLI."""

import logging

import pytest
import yaml
from click.testing import CliRunner

from fixtures.samples import two_host_fleet
from userlist import cli
from userlist.cli import main


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def config_file(tmp_path):
    def _make(**extra):
        data = {
            "server_list": ["web1", "down.example.com", "web2"],
            "ssh_user": "ansible",
            "private_keys": [str(tmp_path / "id_ed25519")],
            "out_file": str(tmp_path / "out" / "userlist.csv"),
            "collisions_file": str(tmp_path / "out" / "uid_conflict.csv"),
            "uidmap_file": str(tmp_path / "out" / "uid_map.csv"),
            "logfile": str(tmp_path / "userlist.log"),
        }
        data.update(extra)
        path = tmp_path / "userlist.yml"
        path.write_text(yaml.safe_dump(data))
        return path

    return _make


@pytest.fixture
def fake_ssh(monkeypatch):
    runner = two_host_fleet()
    monkeypatch.setattr(cli, "build_runner", lambda *args, **kwargs: runner)
    return runner


class TestMain:
    def test_full_run(self, tmp_path, config_file, fake_ssh):
        result = CliRunner().invoke(main, ["--config", str(config_file())])
        assert result.exit_code == 0, result.output
        assert "Parsed 2 of 3 hosts" in result.output
        assert "failed: down.example.com" in result.output

        out = tmp_path / "out"
        users = (out / "userlist.csv").read_text().splitlines()
        assert users[0] == "web1,root,0,x,root,/bin/bash,,not-applicable,2022-01-08"
        assert "web1,alice,1000,x,Alice A,/bin/bash,2024-01-01,sha512,2019-04-14" in users
        assert len(users) == 6
        assert (out / "uid_conflict.csv").read_text() == "1000,alice,bob\n"
        assert (out / "uid_map.csv").read_text() == "0,root,root\n1001,alice,Alice A\n1002,carol,\n"

        log_text = (tmp_path / "userlist.log").read_text()
        assert "Successfully parsed 2 hosts out of 3" in log_text

    def test_password_only(self, tmp_path, config_file, fake_ssh):
        result = CliRunner().invoke(main, ["-c", str(config_file()), "--password-only"])
        assert result.exit_code == 0, result.output
        users = (tmp_path / "out" / "userlist.csv").read_text().splitlines()
        assert [line.split(",")[1] for line in users] == ["alice", "carol", "alice"]
        # uid reports ignore the filter
        assert (tmp_path / "out" / "uid_conflict.csv").read_text() == "1000,alice,bob\n"

    def test_missing_config(self, tmp_path):
        result = CliRunner().invoke(main, ["--config", str(tmp_path / "absent.yml")])
        assert result.exit_code == 1
        assert "Unable to read config" in result.output

    def test_no_valid_keys(self, config_file):
        result = CliRunner().invoke(main, ["--config", str(config_file())])
        assert result.exit_code == 1
        assert "No valid private keys found" in result.output

    def test_unreadable_host_list(self, tmp_path, config_file, fake_ssh):
        path = config_file(server_list=str(tmp_path / "missing-servers.txt"))
        result = CliRunner().invoke(main, ["--config", str(path)])
        assert result.exit_code == 1
        assert "Unable to open" in result.output

    def test_output_failure_is_fatal(self, monkeypatch, config_file, fake_ssh):
        def _boom(rows, path, **kwargs):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(cli, "export_csv", _boom)
        result = CliRunner().invoke(main, ["--config", str(config_file())])
        assert result.exit_code == 1
        assert "Unable to write output" in result.output

    def test_unknown_loglevel_falls_back(self, config_file, fake_ssh):
        result = CliRunner().invoke(main, ["--config", str(config_file(loglevel="chatty"))])
        assert result.exit_code == 0, result.output
        assert 'Unknown loglevel: chatty.  Assuming "info".' in result.output

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestConfigureLogging:
    @pytest.mark.parametrize(
        "name, level",
        [("trace", logging.DEBUG), ("Info", logging.INFO), ("warn", logging.WARNING), ("error", logging.ERROR)],
    )
    def test_levels(self, tmp_path, name, level):
        cli.configure_logging(name, str(tmp_path / "x.log"))
        assert logging.getLogger().level == level
