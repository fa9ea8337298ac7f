"""Reading and writing kubeconfig files.

Contract:
- load_kubeconfig: path -> KubeConfig, raises KubeconfigNotFoundError,
  KubeconfigReadError or MalformedKubeconfigError
- write_kubeconfig: atomic replace of the target file, raises KubeconfigWriteError
"""

import contextlib
import logging
import os
import tempfile
from pathlib import Path

import yaml
from pydantic import ValidationError

from .errors import KubeconfigNotFoundError
from .errors import KubeconfigReadError
from .errors import KubeconfigWriteError
from .errors import MalformedKubeconfigError
from .models import KubeConfig
from .models import empty_kubeconfig

logger = logging.getLogger(__name__)

# Kubeconfigs hold credentials
NEW_FILE_MODE = 0o600


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"]) or "<document>"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def load_kubeconfig(path: Path) -> KubeConfig:
    """Load and validate a kubeconfig file."""
    path = Path(path)
    if not path.exists():
        raise KubeconfigNotFoundError(path)

    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedKubeconfigError(path, "not valid UTF-8") from e
    except OSError as e:
        raise KubeconfigReadError(path, e) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise MalformedKubeconfigError(path, f"invalid YAML ({e})") from e

    if not isinstance(data, dict):
        raise MalformedKubeconfigError(path, "expected a mapping at the top level")

    try:
        document = KubeConfig.model_validate(data)
    except ValidationError as e:
        raise MalformedKubeconfigError(path, _describe_validation_error(e)) from e

    logger.debug(
        f"Loaded {path}: {len(document.clusters)} clusters, "
        f"{len(document.contexts)} contexts, {len(document.users)} users"
    )
    return document


def load_or_create(path: Path) -> KubeConfig:
    """Load the destination kubeconfig, or start an empty one if it does not exist."""
    path = Path(path)
    if not path.exists():
        logger.info(f"Destination {path} does not exist, starting from an empty kubeconfig")
        return empty_kubeconfig()
    return load_kubeconfig(path)


def dump_kubeconfig(document: KubeConfig) -> str:
    """Render a kubeconfig as YAML, keeping the document's key order."""
    return yaml.safe_dump(document.to_dict(), default_flow_style=False, sort_keys=False)


def write_kubeconfig(path: Path, document: KubeConfig) -> None:
    """Write ``document`` to ``path`` atomically.

    The parent directory is created if needed. An existing file keeps its
    permissions; a new one is created readable by the owner only.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        output = dump_kubeconfig(document)
        mode = path.stat().st_mode & 0o777 if path.exists() else NEW_FILE_MODE
    except (OSError, yaml.YAMLError) as e:
        raise KubeconfigWriteError(path, e) from e

    # Write to temp file first (atomic write pattern)
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="utf-8", dir=path.parent, prefix=f".{path.name}_", suffix=".tmp", delete=False
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            try:
                tmp_file.write(output)
                tmp_file.flush()
                os.chmod(temp_path, mode)

                # Atomic rename
                temp_path.replace(path)

            except OSError:
                with contextlib.suppress(OSError):
                    temp_path.unlink()
                raise
    except OSError as e:
        raise KubeconfigWriteError(path, e) from e

    logger.info(f"Wrote {path}")
