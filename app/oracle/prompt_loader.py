from pathlib import Path

from app.oracle.exceptions import OracleError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(task: str, prompt_dir: Path | None = None) -> str:
    """Load the prompt template for an oracle task.

    Args:
        task: Task name, e.g. ``report_tier``; reads ``{task}_prompt.txt``.
        prompt_dir: Directory holding the templates.
                    Defaults to the bundled prompts directory.

    Returns:
        The raw template string with ``str.format`` placeholders.

    Raises:
        OracleError: if the file cannot be read.
    """
    path = (prompt_dir or _DEFAULT_PROMPT_DIR) / f"{task}_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise OracleError(f"Failed to load prompt template: {exc}") from exc


def load_json_schema(task: str, prompt_dir: Path | None = None) -> str:
    """Load the JSON schema an oracle task's response must follow.

    Raises:
        OracleError: if the file cannot be read.
    """
    path = (prompt_dir or _DEFAULT_PROMPT_DIR) / f"{task}_schema.json"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise OracleError(f"Failed to load JSON schema: {exc}") from exc
