from __future__ import annotations

import stat

import pytest

from shop.auth import get_verifier
from shop.auth.keys import KeyStore
from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.helpers.auth import KID


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()


class TestGenerate:
    def test_writes_private_key(self, runner, tmp_path):
        result = runner.invoke(args=["keys", "generate", "--kid", "k1", "--folder", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "k1"
        pem = tmp_path / "k1.pem"
        assert stat.S_IMODE(pem.stat().st_mode) == 0o600
        assert KeyStore.from_folder(tmp_path).kids() == ["k1"]

    def test_random_kid_when_omitted(self, runner, tmp_path):
        result = runner.invoke(args=["keys", "generate", "--folder", str(tmp_path)])

        assert result.exit_code == 0, result.output
        kid = result.output.strip()
        assert (tmp_path / f"{kid}.pem").exists()

    def test_refuses_to_overwrite(self, runner, tmp_path):
        (tmp_path / "k1.pem").write_text("existing")
        result = runner.invoke(args=["keys", "generate", "--kid", "k1", "--folder", str(tmp_path)])

        assert result.exit_code != 0
        assert "already exists" in result.output
        assert (tmp_path / "k1.pem").read_text() == "existing"


class TestToken:
    def test_prints_signed_token(self, runner, session):
        user = UserFactory(roles=["ADMIN"])

        result = runner.invoke(
            args=["keys", "token", "--kid", KID, "--email", user.email],
            input=f"{DEFAULT_PASSWORD}\n",
        )

        assert result.exit_code == 0, result.output
        lines = result.output.strip().splitlines()
        assert lines[-3] == "-----BEGIN TOKEN-----"
        assert lines[-1] == "-----END TOKEN-----"
        assert get_verifier().verify(lines[-2]).subject == user.id

    def test_bad_password(self, runner, session):
        user = UserFactory()
        result = runner.invoke(
            args=["keys", "token", "--kid", KID, "--email", user.email, "--password", "nope"]
        )

        assert result.exit_code == 1
        assert "BEGIN TOKEN" not in result.output

    def test_unknown_kid(self, runner, session):
        result = runner.invoke(
            args=["keys", "token", "--kid", "missing", "--email", "a@b.c", "--password", "x"]
        )

        assert result.exit_code == 2
        assert "Unknown key id 'missing'" in result.output

    def test_defaults_to_active_kid(self, app, runner, session, monkeypatch):
        monkeypatch.setitem(app.config, "AUTH_ACTIVE_KID", KID)
        user = UserFactory()

        result = runner.invoke(
            args=["keys", "token", "--email", user.email, "--password", DEFAULT_PASSWORD]
        )

        assert result.exit_code == 0, result.output
        assert "-----BEGIN TOKEN-----" in result.output

    def test_kid_required_without_active_kid(self, app, runner, monkeypatch):
        monkeypatch.setitem(app.config, "AUTH_ACTIVE_KID", "")
        result = runner.invoke(args=["keys", "token", "--email", "a@b.c", "--password", "x"])

        assert result.exit_code == 2
        assert "AUTH_ACTIVE_KID" in result.output
