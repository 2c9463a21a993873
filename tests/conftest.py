import re
import sys
from pathlib import Path
from typing import List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from eclipseformat.errors import TransformError
from eclipseformat.gateway import TransformGateway
from eclipseformat.providers import TransformProvider
from eclipseformat.shared import FormatterSettings


_CLASS_BRACE_RE = re.compile(r"class (\w+)\{")

PROFILE_XML = """<?xml version="1.0" encoding="UTF-8" standalone="no"?>
<profiles version="21">
  <profile kind="CodeFormatterProfile" name="Team" version="21">
    <setting id="org.eclipse.jdt.core.formatter.tabulation.char" value="space"/>
    <setting id="org.eclipse.jdt.core.formatter.lineSplit" value="120"/>
  </profile>
</profiles>
"""


class SpaceAfterClassProvider(TransformProvider):
    """Inserts one space between a class name and its opening brace."""

    NAME = "test-space-after-class"
    DESCRIPTION = "Test provider"

    def __init__(self):
        self.calls: List[str] = []

    def transform(self, content: str, settings: FormatterSettings) -> str:
        self.calls.append(content)
        return _CLASS_BRACE_RE.sub(r"class \1 {", content)


class RejectingProvider(TransformProvider):
    """Rejects any content containing 'broken'."""

    NAME = "test-rejecting"
    DESCRIPTION = "Test provider"

    def transform(self, content: str, settings: FormatterSettings) -> str:
        if "broken" in content:
            raise TransformError("Syntax error on token 'broken'")
        return content.upper()


@pytest.fixture
def spacing_provider() -> SpaceAfterClassProvider:
    return SpaceAfterClassProvider()


@pytest.fixture
def spacing_gateway(spacing_provider: SpaceAfterClassProvider) -> TransformGateway:
    return TransformGateway(spacing_provider, FormatterSettings({"k": "v"}))


@pytest.fixture
def profile_file(tmp_path: Path) -> Path:
    path = tmp_path / "eclipse-format.xml"
    path.write_text(PROFILE_XML, encoding="utf-8")
    return path


@pytest.fixture
def java_tree(tmp_path: Path) -> Path:
    """
    src/
      A.java          needs formatting
      B.JAVA          already formatted
      notes.txt       not eligible
      sub/
        C.java        needs formatting
    """
    root = tmp_path / "src"
    (root / "sub").mkdir(parents=True)
    (root / "A.java").write_text("public class A{}", encoding="utf-8")
    (root / "B.JAVA").write_text("public class B {}", encoding="utf-8")
    (root / "notes.txt").write_text("class Notes{}", encoding="utf-8")
    (root / "sub" / "C.java").write_text("class C{}", encoding="utf-8")
    return root
