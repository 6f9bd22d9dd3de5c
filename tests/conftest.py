from __future__ import annotations

from collections.abc import Callable, Iterator
import logging
from pathlib import Path
import sys

import pytest

from pdfsmith.core.config import WrapperConfig


# Stand-in for wkhtmltopdf: concatenates page/cover sources that are files
# (URLs are echoed verbatim), honours `--exit-code N` and `--stderr TEXT`, and
# writes the result to the destination given as last argument.
FAKE_RENDERER = '''
import sys

args = sys.argv[1:]
destination = args[-1]
exit_code = 0
chunks = []
index = 0
while index < len(args) - 1:
    token = args[index]
    if token == "--exit-code":
        exit_code = int(args[index + 1])
        index += 2
        continue
    if token == "--stderr":
        sys.stderr.write(args[index + 1])
        index += 2
        continue
    if token in ("page", "cover"):
        source = args[index + 1]
        try:
            with open(source, "rb") as handle:
                chunks.append(handle.read())
        except OSError:
            chunks.append(source.encode("utf-8"))
        index += 2
        continue
    index += 1

payload = b"%PDF-fake\\n" + b"\\n".join(chunks)
if destination == "-":
    sys.stdout.buffer.write(payload)
else:
    with open(destination, "wb") as handle:
        handle.write(payload)
sys.exit(exit_code)
'''


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    yield
    package_logger = logging.getLogger("pdfsmith")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def fake_renderer(tmp_path: Path) -> Path:
    script = tmp_path / "fake_wkhtmltopdf.py"
    script.write_text(FAKE_RENDERER, encoding="utf-8")
    return script


@pytest.fixture
def fake_config(fake_renderer: Path) -> WrapperConfig:
    return WrapperConfig(wkhtmltopdf_command=[sys.executable, str(fake_renderer)])


@pytest.fixture
def python_command(tmp_path: Path) -> Callable[[str], list[str]]:
    """Return argv running ``body`` as a Python script."""
    counter = {"value": 0}

    def factory(body: str) -> list[str]:
        counter["value"] += 1
        script = tmp_path / f"script_{counter['value']}.py"
        script.write_text(body, encoding="utf-8")
        return [sys.executable, str(script)]

    return factory
