"""Tests for the command line entry point."""

from pathlib import Path
from unittest.mock import patch

import pytest

from static_site_deploy import cli

SITE = "example-site"


class TestParseArgs:
  """Test argument parsing."""

  def test_positional_site_and_folder(self) -> None:
    """Site and folder are positional."""
    args = cli.parse_args([SITE, "dist", "--region", "eu-west-1", "--concurrency", "4"])

    assert args.site == SITE
    assert args.folder == Path("dist")
    assert args.region == "eu-west-1"
    assert args.concurrency == 4
    assert args.config is None


class TestResolveSites:
  """Test how flags and config files become site configs."""

  def test_flags_only(self) -> None:
    """Without a config file the flags define one site."""
    sites = cli.resolve_sites(cli.parse_args([SITE, "dist", "--profile", "deploy"]))

    assert len(sites) == 1
    assert sites[0].name == SITE
    assert sites[0].folder == Path("dist")
    assert sites[0].profile == "deploy"
    assert sites[0].region == "eu-central-1"

  def test_requires_folder_without_config(self) -> None:
    """A site name alone is not enough."""
    with pytest.raises(cli.ConfigError):
      cli.resolve_sites(cli.parse_args([SITE]))

  def test_rejects_bad_concurrency(self) -> None:
    """Zero workers is refused."""
    with pytest.raises(cli.ConfigError):
      cli.resolve_sites(cli.parse_args([SITE, "dist", "--concurrency", "0"]))

  def test_config_file_with_override(self, tmp_path: Path) -> None:
    """A named site is picked from the file and flags override it."""
    config = tmp_path / "sites.yaml"
    config.write_text(
      "sites:\n"
      "  - name: example-site\n"
      "    folder: dist\n"
      "  - name: other-site\n"
      "    folder: other\n"
    )

    sites = cli.resolve_sites(cli.parse_args([SITE, "--config", str(config), "--region", "us-east-1"]))

    assert [site.name for site in sites] == [SITE]
    assert sites[0].folder == tmp_path / "dist"
    assert sites[0].region == "us-east-1"

  def test_config_file_all_sites(self, tmp_path: Path) -> None:
    """Without a site name every configured site is deployed."""
    config = tmp_path / "sites.yaml"
    config.write_text("sites:\n  - name: a\n    folder: a\n  - name: b\n    folder: b\n")

    sites = cli.resolve_sites(cli.parse_args(["--config", str(config)]))

    assert [site.name for site in sites] == ["a", "b"]


class TestMain:
  """Test exit statuses."""

  def test_end_to_end_success(self, aws: None, site_folder: Path) -> None:
    """A full deploy against mocked AWS exits 0."""
    assert cli.main([SITE, str(site_folder)]) == 0

  def test_missing_arguments_exit_1(self) -> None:
    """Bad invocation exits 1."""
    assert cli.main([]) == 1

  def test_stops_at_first_failing_site(self, tmp_path: Path) -> None:
    """Later sites are skipped once one deploy fails."""
    config = tmp_path / "sites.yaml"
    config.write_text("sites:\n  - name: a\n    folder: a\n  - name: b\n    folder: b\n")

    with (
      patch.object(cli.StaticSiteDeployer, "from_site_config") as from_site_config,
      patch.object(cli, "run_deploy", return_value=1) as run_deploy,
    ):
      status = cli.main(["--config", str(config)])

    assert status == 1
    assert run_deploy.call_count == 1
    assert from_site_config.call_args.args[0].name == "a"

  @pytest.mark.parametrize(
    "content",
    [
      "sites:\n  - just-a-string\n",
      "sites:\n  - name: example-site\n    folder: dist\n    concurrency: many\n",
    ],
  )
  def test_malformed_config_exits_1(self, tmp_path: Path, content: str) -> None:
    """A broken config file is reported and exits 1."""
    config = tmp_path / "sites.yaml"
    config.write_text(content)

    assert cli.main(["--config", str(config)]) == 1
