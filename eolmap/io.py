import errno
import logging
import os
import shutil
import stat
from pathlib import Path

import jinja2

logger = logging.getLogger(__name__)

##################################################################################################
# File Reading/Writing
#
# Everything here is byte-exact: no newline translation in either direction,
# since the line endings are what is being measured.
##################################################################################################

def read_bytes(path: Path) -> bytes:
    assert isinstance(path, Path), f"Expected Path, got {type(path)}"
    return path.read_bytes()


def read_text_file(path: Path) -> str:
    assert isinstance(path, Path), f"Expected Path, got {type(path)}"
    with open(path, 'rt', encoding='utf-8', newline='') as f:
        return f.read()


def write_text_file(path: Path, content: str) -> None:
    assert isinstance(path, Path), f"Expected Path, got {type(path)}"

    if not path.parent.exists():
        logger.debug("Creating directory %s", path.parent)
        path.parent.mkdir(parents=True)

    logger.debug("Writing %d bytes to %s", len(content), path)
    with open(path, 'wb') as f:
        f.write(content.encode('utf-8'))


def prepend_text_file(path: Path, text: str) -> None:
    write_text_file(path, text + read_text_file(path))


def ensure_dir(path: Path) -> None:
    assert isinstance(path, Path), f"Expected Path, got {type(path)}"
    path.mkdir(parents=True, exist_ok=True)


def _remove_readonly(func, path, exc: BaseException) -> None:
    # git marks object files read-only, which blocks deletion on Windows
    if func in (os.rmdir, os.unlink, os.remove) and isinstance(exc, OSError) and exc.errno == errno.EACCES:
        os.chmod(path, stat.S_IRWXU | stat.S_IRWXG | stat.S_IRWXO)
        func(path)
    else:
        raise exc


def delete_if_exists(path: Path) -> None:
    if path.exists():
        logger.debug("Deleting %s", path)
        if path.is_dir():
            shutil.rmtree(path, onexc=_remove_readonly)
        else:
            path.unlink()


def read_template(path: Path) -> jinja2.Template:
    assert isinstance(path, Path), f"Expected Path, got {type(path)}"
    return jinja2.Template(read_text_file(path), keep_trailing_newline=True)
