"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from autocommit.resolver import RuntimeConfig


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_dir(temp_dir, mocker):
    """Point the global config directory at a temporary location."""
    mock_dir = temp_dir / ".autocommit"
    mocker.patch("autocommit.global_config._CONFIG_DIR", mock_dir)
    return mock_dir


@pytest.fixture
def ollama_config():
    """Resolved configuration for a local Ollama server."""
    return RuntimeConfig(
        provider="ollama",
        model="llama3.1:8b",
        base_url="http://localhost:11434",
    )


@pytest.fixture
def groq_config():
    """Resolved configuration for Groq."""
    return RuntimeConfig(
        provider="groq",
        model="llama-3.1-70b-versatile",
        base_url="https://api.groq.com/openai/v1",
        api_key="gsk-test",
    )


@pytest.fixture
def sample_name_status():
    """Sample `git diff --cached --name-status` output."""
    return "A\tnew_file.py\nM\texisting_file.py\nD\told_file.py"


@pytest.fixture
def sample_numstat():
    """Sample `git diff --cached --numstat` output."""
    return "10\t0\tnew_file.py\n3\t1\texisting_file.py\n0\t7\told_file.py\n-\t-\tlogo.png"


@pytest.fixture
def sample_diff():
    """Sample staged diff."""
    return """diff --git a/existing_file.py b/existing_file.py
index 1234567..abcdefg 100644
--- a/existing_file.py
+++ b/existing_file.py
@@ -1,5 +1,8 @@
 def main():
-    print("old")
+    print("new")
+
+def helper():
+    return True"""


def _fake_response(text, status_code=200):
    response = MagicMock()
    response.text = text
    response.status_code = status_code
    return response


@pytest.fixture
def make_response():
    """Factory for fake requests.Response objects with a given body."""
    return _fake_response


@pytest.fixture
def mock_session():
    """HTTP session whose post() can be configured per test."""
    session = MagicMock()
    session.post.return_value = _fake_response('{"response": "feat: add helper"}')
    return session
