# Shared pytest fixtures
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from unittest.mock import MagicMock
from urllib.parse import parse_qs, urlparse

import pytest
import requests

from sheet2site.logging.init import reset_logging

SOURCE_VARS = ("POST_URL", "SERVICE_URL", "PROJECT_URL", "CONTACT_URL")
SITE_VARS = ("SITE_TITLE", "SITE_DESCRIPTION", "BASE_URL")

POSTS_ID = "postsSheet123"
SERVICES_ID = "servicesSheet_456"
PROJECTS_ID = "projects-789"
CONTACT_ID = "contactSheet000"


def sheet_link(sheet_id: str) -> str:
    return f"https://docs.google.com/spreadsheets/d/{sheet_id}/edit#gid=0"


def drive_link(file_id: str) -> str:
    return f"https://drive.google.com/file/d/{file_id}/view?usp=sharing"


def make_response(content: bytes, status_code: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.content = content
    resp.status_code = status_code
    resp.iter_content.return_value = [content[i:i + 4] for i in range(0, len(content), 4)]
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Client Error")
    else:
        resp.raise_for_status.return_value = None
    return resp


@dataclass
class FakeGoogle:
    """Stand-in for docs.google.com / drive.google.com behind requests.get."""
    sheets: dict[str, bytes] = field(default_factory=dict)
    files: dict[str, bytes] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    def add_sheet(self, sheet_id: str, csv_text: str) -> str:
        self.sheets[sheet_id] = csv_text.encode("utf-8")
        return sheet_link(sheet_id)

    def add_file(self, file_id: str, content: bytes = b"\xff\xd8\xff\xe0JPEGDATA") -> str:
        self.files[file_id] = content
        return drive_link(file_id)

    def get(self, url: str, **kwargs) -> MagicMock:
        self.calls.append(url)
        parsed = urlparse(url)
        if parsed.netloc == "docs.google.com":
            sheet_id = parsed.path.split("/")[3]
            if sheet_id in self.sheets:
                return make_response(self.sheets[sheet_id])
            return make_response(b"Not Found", status_code=404)
        if parsed.netloc == "drive.google.com":
            file_id = parse_qs(parsed.query).get("id", [""])[0]
            if file_id in self.files:
                return make_response(self.files[file_id])
            raise requests.ConnectionError(f"connection refused: {file_id}")
        raise requests.ConnectionError(f"unexpected host: {url}")


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch, tmp_path: Path) -> Path:
    (tmp_path / "config").mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def clean_env(monkeypatch) -> None:
    # setenv first so teardown also removes values a test loads from .env
    for name in SOURCE_VARS + SITE_VARS + ("GITHUB_ACTIONS",):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture()
def fake_google(monkeypatch) -> FakeGoogle:
    fake = FakeGoogle()
    monkeypatch.setattr(requests, "get", fake.get)
    return fake


@pytest.fixture()
def sample_sheets(fake_google: FakeGoogle) -> dict[str, str]:
    """Register a realistic set of four sheets; returns env var -> link."""
    hero = fake_google.add_file("heroImg1")
    svc_img = fake_google.add_file("svcImg2")
    posts = (
        "title,content,date,draft,description,tags,image,author\n"
        f"\"Hello, World!\",\"# Hi\n\nFirst post.\",2024-01-05,false,Intro,\"news, hugo\",{hero},Ann\n"
        "No Body,,2024-01-06,false,,,,Bob\n"
        "Draft Post,Body text,2024-02-01,true,,,,\n"
    )
    services = (
        "title,description,icon,img\n"
        f"Consulting,We advise,🧭,{svc_img}\n"
        "Support,Always on,,\n"
        ",missing title,,\n"
    )
    projects = (
        "title,description,url,img\n"
        "Site Launch,A new site,https://example.com/launch,\n"
        "Secret,Hidden,,https://drive.google.com/open?id=nope\n"
    )
    contact = (
        "field,value\n"
        "email,first@example.com\n"
        "phone,+1 555 0100\n"
        "email,second@example.com\n"
        "twitter,\n"
    )
    return {
        "POST_URL": fake_google.add_sheet(POSTS_ID, posts),
        "SERVICE_URL": fake_google.add_sheet(SERVICES_ID, services),
        "PROJECT_URL": fake_google.add_sheet(PROJECTS_ID, projects),
        "CONTACT_URL": fake_google.add_sheet(CONTACT_ID, contact),
    }


@pytest.fixture()
def sample_env(monkeypatch, clean_env, sample_sheets: dict[str, str]) -> dict[str, str]:
    for name, value in sample_sheets.items():
        monkeypatch.setenv(name, value)
    return sample_sheets


@pytest.fixture()
def sample_config_yaml() -> str:
    return """site:
  title: Test Site
  description: Built from sheets
  hero_image: /images/hero.jpg
paths:
  content_dir: ./content/posts
  image_dir: ./static/images
  temp_dir: ./temp
  site_config: ./hugo.toml
  log_dir: ./logs
request_timeout: 30
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "sheet2site.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
