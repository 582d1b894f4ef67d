"""Test setup for a2conf."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


VHOST_CONFIG = """
# Test VirtualHost
<VirtualHost *:80 *:443>
    ServerAdmin postmaster@example.com
    ServerName example.com
    ServerAlias www.example.com example.example.com
    ServerAlias x.example.com
    DocumentRoot /usr/local/apache/htdocs/example.com

    Command1 first
    Command1 second

    <IfModule mod_ssl.c>
        Command1 nested
        SSLEngine on
        SSLCertificateFile /etc/letsencrypt/live/example.com/fullchain.pem
        SSLCertificateKeyFile /etc/letsencrypt/live/example.com/privkey.pem
        SSLCertificateChainFile /etc/letsencrypt/live/example.com/chain.pem
    </IfModule mod_ssl.c>
</VirtualHost>
"""


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for pytest."""
    config.addinivalue_line(
        "markers",
        "filesystem: marks tests that build configuration trees on disk",
    )


@pytest.fixture
def vhost_config() -> str:
    """Configuration with one VirtualHost and a nested IfModule section."""
    return VHOST_CONFIG


@pytest.fixture
def conf_dir(tmp_path: Path) -> Path:
    """Directory with a main config including a conf.d directory.

    Layout:
        apache2.conf      -> ServerRoot, Include conf.d
        conf.d/a.conf     -> one VirtualHost
        conf.d/b.conf     -> one directive
        test.conf         -> two directives
    """
    (tmp_path / "apache2.conf").write_text(
        'ServerRoot "/etc/apache2"\nInclude conf.d\nListen 80\n'
    )
    conf_d = tmp_path / "conf.d"
    conf_d.mkdir()
    (conf_d / "a.conf").write_text(
        "<VirtualHost *:80>\n    ServerName a.example.com\n</VirtualHost>\n"
    )
    (conf_d / "b.conf").write_text("KeepAlive On\n")
    (tmp_path / "test.conf").write_text("ServerTokens Prod\nServerSignature Off\n")
    return tmp_path
