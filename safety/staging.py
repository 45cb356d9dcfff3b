"""
staging.py - Staged writes with atomic replace
ONE RESPONSIBILITY: Never leave a half-written target behind

New content is written to a temporary file next to the target and moved
over it with os.replace() only when the temporary file is non-empty.
Temporary files still pending are removed on every exit path: context
manager exit, interpreter exit, and SIGTERM/SIGHUP.
"""

import atexit
import os
import shutil
import signal
import tempfile

from core.errors import WriteFailed
from utils import logger

_pending = set()
_handlers_installed = False

def _cleanup():
    """Remove staging files that were never committed."""
    for path in list(_pending):
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.log_warning(f"Could not remove staging file {path}: {e}")
        _pending.discard(path)

def _on_signal(signum, frame):
    _cleanup()
    raise SystemExit(128 + signum)

def _install_handlers():
    global _handlers_installed
    if _handlers_installed:
        return

    atexit.register(_cleanup)
    for name in ("SIGTERM", "SIGHUP"):
        signum = getattr(signal, name, None)
        if signum is None:
            continue
        try:
            signal.signal(signum, _on_signal)
        except ValueError:
            # Not the main thread; atexit and the context manager still apply
            pass
    _handlers_installed = True


class StagedFile:
    """
    Temporary sibling of a target file.

    Usage:
        with StagedFile(target) as staged:
            staged.write_text(content)
            staged.commit()
    """

    def __init__(self, target, profile=None):
        self.target = target
        self.profile = profile
        self.path = None
        self.committed = False

    def __enter__(self):
        _install_handlers()
        directory = os.path.dirname(os.path.abspath(self.target)) or "."
        prefix = "." + os.path.basename(self.target) + "."
        try:
            fd, self.path = tempfile.mkstemp(prefix=prefix, suffix=".tmp", dir=directory)
            os.close(fd)
        except OSError as e:
            raise WriteFailed(f"cannot create staging file: {e}", profile=self.profile, artifact=self.target)
        _pending.add(self.path)
        return self

    def __exit__(self, exc_type, exc, tb):
        if not self.committed:
            self.discard()
        return False

    def write_text(self, content):
        self._write(lambda: self._write_text(content))

    def write_bytes(self, data):
        self._write(lambda: self._write_bytes(data))

    def copy_from(self, source):
        """Stage a byte-for-byte copy of source."""
        self._write(lambda: shutil.copyfile(source, self.path))

    def _write_text(self, content):
        with open(self.path, 'w', encoding='utf-8') as f:
            f.write(content)

    def _write_bytes(self, data):
        with open(self.path, 'wb') as f:
            f.write(data)

    def _write(self, action):
        try:
            action()
        except OSError as e:
            raise WriteFailed(f"staging write failed: {e}", profile=self.profile, artifact=self.target)

    def commit(self):
        """Atomically move the staged content over the target."""
        try:
            size = os.path.getsize(self.path)
        except OSError as e:
            raise WriteFailed(f"staging file vanished: {e}", profile=self.profile, artifact=self.target)

        if size == 0:
            raise WriteFailed("refusing to replace target with empty content",
                              profile=self.profile, artifact=self.target)

        # Keep the target's permissions when it already exists
        if os.path.exists(self.target):
            try:
                shutil.copymode(self.target, self.path)
            except OSError:
                logger.log_warning(f"Could not copy permissions of {self.target}")

        try:
            os.replace(self.path, self.target)
        except OSError as e:
            raise WriteFailed(f"atomic replace failed: {e}", profile=self.profile, artifact=self.target)

        _pending.discard(self.path)
        self.committed = True
        logger.log_info(f"Wrote {self.target}")

    def discard(self):
        if self.path is None:
            return
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.log_warning(f"Could not remove staging file {self.path}: {e}")
        _pending.discard(self.path)


def write_text_atomic(target, content, profile=None):
    """Stage content and replace target with it."""
    with StagedFile(target, profile=profile) as staged:
        staged.write_text(content)
        staged.commit()


def copy_atomic(source, target, profile=None):
    """Replace target with a byte-for-byte copy of source."""
    with StagedFile(target, profile=profile) as staged:
        staged.copy_from(source)
        staged.commit()
