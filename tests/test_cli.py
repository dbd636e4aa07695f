import json

import pytest
from typer.testing import CliRunner

from cli import main as cli_main
from conftest import FakeGateway, make_package
from core.domain.models import Repository

runner = CliRunner()


class ManagedFakeGateway(FakeGateway):
    closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True


@pytest.fixture
def install_gateway(monkeypatch: pytest.MonkeyPatch, github_env):
    def _install(gateway: ManagedFakeGateway) -> ManagedFakeGateway:
        monkeypatch.setattr(cli_main, "build_gateway", lambda settings: gateway)
        return gateway

    return _install


def _repository(private: bool = True) -> Repository:
    return Repository(
        is_private=private,
        packages=[make_package("pkg", [f"v{i}" for i in range(7, 0, -1)])],
    )


def test_prune_prints_set_output(install_gateway) -> None:
    gateway = install_gateway(ManagedFakeGateway(_repository()))

    result = runner.invoke(cli_main.app, ["prune"])

    assert result.exit_code == 0, result.output
    assert gateway.delete_calls == ["id-v2", "id-v1"]
    assert gateway.closed is True
    assert (
        '::set-output name=removed_package_versions::'
        '["acme/widgets/pkg:v2","acme/widgets/pkg:v1"]'
    ) in result.output


def test_prune_writes_github_output(install_gateway, monkeypatch, tmp_path) -> None:
    output = tmp_path / "github_output"
    monkeypatch.setenv("GITHUB_OUTPUT", str(output))
    install_gateway(ManagedFakeGateway(_repository()))

    result = runner.invoke(cli_main.app, ["prune", "--keep-versions", "6"])

    assert result.exit_code == 0, result.output
    assert output.read_text(encoding="utf-8") == (
        'removed_package_versions=["acme/widgets/pkg:v1"]\n'
    )
    assert "::set-output" not in result.output


def test_prune_dry_run_deletes_nothing(install_gateway, tmp_path) -> None:
    gateway = install_gateway(ManagedFakeGateway(_repository()))
    export = tmp_path / "run.json"

    result = runner.invoke(cli_main.app, ["prune", "--dry-run", "--export-json", str(export)])

    assert result.exit_code == 0, result.output
    assert gateway.delete_calls == []
    payload = json.loads(export.read_text(encoding="utf-8"))
    assert payload["dry_run"] is True
    assert payload["removed"] == ["acme/widgets/pkg:v2", "acme/widgets/pkg:v1"]


def test_prune_public_repository_fails(install_gateway) -> None:
    gateway = install_gateway(ManagedFakeGateway(_repository(private=False)))

    result = runner.invoke(cli_main.app, ["prune"])

    assert result.exit_code == 1
    assert gateway.delete_calls == []
    assert "[acme/widgets] Repository is public" in result.output
    assert "set-output" not in result.output


def test_prune_deletion_failure_reports_nothing(install_gateway) -> None:
    gateway = install_gateway(ManagedFakeGateway(_repository(), fail_on={"id-v1"}))

    result = runner.invoke(cli_main.app, ["prune"])

    assert result.exit_code == 1
    assert gateway.delete_calls == ["id-v2", "id-v1"]
    assert "[pkg:v1] Remove package version failed: boom" in result.output
    assert "set-output" not in result.output


def test_prune_missing_configuration(monkeypatch, github_env) -> None:
    monkeypatch.delenv("GITHUB_TOKEN")

    result = runner.invoke(cli_main.app, ["prune"])

    assert result.exit_code == 1
    assert "Missing GITHUB_TOKEN" in result.output


def test_prune_rejects_negative_keep(install_gateway) -> None:
    install_gateway(ManagedFakeGateway(_repository()))

    result = runner.invoke(cli_main.app, ["prune", "--keep-versions", "-1"])

    assert result.exit_code != 0


def test_doctor_reports_login(monkeypatch, github_env) -> None:
    import httpx

    from adapters.http_client import build_client
    from cli import doctor

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": {"viewer": {"login": "octocat"}}})

    monkeypatch.setattr(
        doctor,
        "build_client",
        lambda settings: build_client(settings, transport=httpx.MockTransport(handler)),
    )

    result = runner.invoke(cli_main.app, ["doctor"])

    assert result.exit_code == 0, result.output
    assert "octocat" in result.output


def test_doctor_fails_without_configuration(monkeypatch, github_env) -> None:
    monkeypatch.delenv("GITHUB_REPOSITORY")

    result = runner.invoke(cli_main.app, ["doctor"])

    assert result.exit_code == 1
    assert "GITHUB_REPOSITORY" in result.output
