"""Offline oracle client adapter.

Answers every task with the least committal response its schema allows, so
a service wired to it never accepts a document on the oracle's word. Use it
for local development and as a template for new provider adapters: implement
BaseOracleClient and register the provider in OracleFactory.
"""

import json
from typing import ClassVar

from app.oracle.client_base import BaseOracleClient
from app.oracle.exceptions import OracleError


class ExampleClientAdapter(BaseOracleClient):
    """Returns a fixed JSON answer per task. No network calls."""

    DEFAULT_RESPONSES: ClassVar[dict[str, dict[str, object]]] = {
        "report_tier": {"tier": "indeterminate", "rationale": "offline oracle"},
        "accounting_equation": {
            "assets": None,
            "liabilities": None,
            "equity": None,
            "difference": None,
            "confidence": "none",
        },
        "dual_opinions": {"cashflow_opinion": "unknown", "credit_opinion": "unknown"},
        "projection_coverage": {
            "final_year": None,
            "duration_years": None,
            "confidence": "none",
        },
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        schema_name: str,
        json_schema: dict[str, object],
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt, json_schema
        response = self.DEFAULT_RESPONSES.get(schema_name)
        if response is None:
            raise OracleError(f"No example response for task '{schema_name}'")
        return json.dumps(response)
