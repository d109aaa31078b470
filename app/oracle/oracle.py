"""AI-backed classification oracle."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any, ClassVar, TypeVar

from app.logging.logger import Log
from app.oracle.base import BaseOracle
from app.oracle.client_base import BaseOracleClient
from app.oracle.exceptions import OracleError
from app.oracle.models import (
    CoverageCheck,
    DualOpinionCheck,
    EquationCheck,
    ReportTierResult,
)
from app.oracle.prompt_loader import load_json_schema, load_prompt_template
from app.oracle.validator import (
    build_coverage_check,
    build_dual_opinion_check,
    build_equation_check,
    build_report_tier,
)

ResultT = TypeVar("ResultT")

DEFAULT_SYSTEM_PROMPT = (
    "You assist a credit analyst reviewing documents submitted by Uruguayan "
    "companies. Answer strictly from the document text and never guess."
)


class LlmOracle(BaseOracle):
    """Answers oracle questions through an AI chat provider.

    Every public method degrades to an unknown result when the provider call,
    JSON parsing or response validation fails.
    """

    TASKS: ClassVar[tuple[str, ...]] = (
        "report_tier",
        "accounting_equation",
        "dual_opinions",
        "projection_coverage",
    )

    def __init__(
        self,
        *,
        client: BaseOracleClient,
        model: str,
        temperature: float = 0.0,
        max_input_chars: int = 12000,
        prompt_dir: Path | None = None,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._max_input_chars = max_input_chars
        self._system_prompt = system_prompt
        self._templates = {task: load_prompt_template(task, prompt_dir) for task in self.TASKS}
        self._schemas = {
            task: json.loads(load_json_schema(task, prompt_dir)) for task in self.TASKS
        }

    def classify_report_tier(
        self, text: str, max_debt_amount: float | None
    ) -> ReportTierResult:
        amount = f"{max_debt_amount:,.0f}" if max_debt_amount is not None else "not declared"
        return self._run(
            "report_tier",
            build_report_tier,
            ReportTierResult.unknown,
            document_text=self._clip(text),
            max_debt_amount=amount,
        )

    def check_accounting_equation(self, text: str) -> EquationCheck:
        return self._run(
            "accounting_equation",
            build_equation_check,
            EquationCheck.unknown,
            document_text=self._clip(text),
        )

    def check_dual_opinions(self, text: str) -> DualOpinionCheck:
        return self._run(
            "dual_opinions",
            build_dual_opinion_check,
            DualOpinionCheck.unknown,
            document_text=self._clip(text),
        )

    def check_projection_coverage(self, text: str, current_year: int) -> CoverageCheck:
        return self._run(
            "projection_coverage",
            build_coverage_check,
            CoverageCheck.unknown,
            document_text=self._clip(text),
            current_year=current_year,
        )

    def _run(
        self,
        task: str,
        build: Callable[[dict[str, Any]], ResultT],
        fallback: Callable[[str | None], ResultT],
        **fields: object,
    ) -> ResultT:
        try:
            prompt = self._templates[task].format(**fields)
            Log.debug(f"Oracle {task} prompt:\n{prompt}")
            raw_response = self._client.create_chat_completion(
                model=self._model,
                temperature=self._temperature,
                system_prompt=self._system_prompt,
                user_prompt=prompt,
                schema_name=task,
                json_schema=self._schemas[task],
            )
            Log.debug(f"Oracle {task} raw response:\n{raw_response}")
            result = build(self._parse_json(raw_response))
        except OracleError as exc:
            Log.warning(f"Oracle {task} degraded to unknown: {exc}")
            return fallback(str(exc))
        Log.info(f"Oracle {task} answered", result=result)
        return result

    def _clip(self, text: str) -> str:
        return text[: self._max_input_chars]

    @staticmethod
    def _parse_json(raw: str) -> dict[str, Any]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise OracleError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise OracleError("JSON response must be an object")
        return parsed
