"""solc operations — compile a Solidity file to its JSON AST."""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path

from sol2seq.errors import CompilerError

logger = logging.getLogger(__name__)

DEFAULT_SOLC = "solc"


def compile_to_ast(file_path: str | Path, solc_binary: str = DEFAULT_SOLC) -> dict:
    """Run ``solc --combined-json ast`` on one file and return the parsed JSON.

    Args:
        file_path: Path to the ``.sol`` source file.
        solc_binary: Name or path of the solc executable.

    Raises:
        CompilerError: If solc is missing, exits non-zero, or prints invalid JSON.
    """
    command = [solc_binary, "--combined-json", "ast", str(file_path)]
    logger.info("Running %s", " ".join(command))

    try:
        proc = subprocess.run(command, capture_output=True, text=True)
    except OSError as e:
        raise CompilerError(f"Failed to execute {solc_binary} on {file_path}: {e}") from e

    if proc.returncode != 0:
        raise CompilerError(f"solc failed: {proc.stderr.strip()}")

    try:
        return json.loads(proc.stdout)
    except json.JSONDecodeError as e:
        raise CompilerError(f"solc produced invalid JSON for {file_path}: {e}") from e
