"""FastAPI server exposing the command assistant and finance calculations.

The browser front end posts transcripts (from speech-to-text or the chat box)
to ``/command`` and gets back what the assistant said plus the side effects
(navigation, search) it wants the page to perform.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stockwise.application.inventory_snapshot import InventorySnapshotError, parse_inventory_rows
from stockwise.application.serialization import to_jsonable
from stockwise.commands.assistant import InventoryStats, build_assistant
from stockwise.commands.navigation import NavigationCommand
from stockwise.domain.inventory import InventoryItem
from stockwise.finance.calculator import FinancialCalculator
from stockwise.finance.settings import FinanceSettings
from stockwise.runtime.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ServerHost:
    """Collects the assistant's side effects for the current request."""

    snapshot: list[InventoryItem] | None = None
    calculator: FinancialCalculator = field(default_factory=FinancialCalculator)
    events: list[dict[str, str]] = field(default_factory=list)

    def navigate(self, route: str) -> None:
        self.events.append({"type": "navigate", "route": route})

    def reload(self) -> None:
        self.events.append({"type": "reload"})

    def go_back(self) -> None:
        self.events.append({"type": "back"})

    def dispatch_search(self, term: str) -> None:
        self.events.append({"type": "search", "term": term})

    def speak(self, text: str) -> None:
        self.events.append({"type": "speak", "text": text})

    def inventory_stats(self) -> InventoryStats | None:
        if self.snapshot is None:
            return None
        valuation = self.calculator.calculate_inventory_valuation(self.snapshot)
        return InventoryStats(
            total_items=valuation.item_count,
            total_value=valuation.total_retail_value,
            total_quantity=valuation.total_quantity,
        )

    def drain(self) -> list[dict[str, str]]:
        events, self.events = self.events, []
        return events


def _error(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse({"status": "error", "message": message}, status_code=status_code)


def _parse_date(raw: Any, field_name: str) -> date | None:
    if raw in (None, ""):
        return None
    try:
        return date.fromisoformat(str(raw))
    except ValueError as exc:
        raise ValueError(f"{field_name} must be an ISO date (YYYY-MM-DD): {raw!r}") from exc


async def _json_body(request: Request) -> Mapping[str, Any]:
    try:
        body = await request.json()
    except ValueError as exc:
        raise ValueError("Request body must be JSON") from exc
    if not isinstance(body, Mapping):
        raise ValueError("Request body must be a JSON object")
    return body


def create_app(
    settings: FinanceSettings | None = None,
    navigation: tuple[NavigationCommand, ...] = (),
) -> FastAPI:
    """Build the app with its own calculator, host and assistant instances."""
    calculator = FinancialCalculator(settings)
    host = ServerHost(calculator=calculator)
    assistant = build_assistant(host, navigation)
    interpreter = assistant.interpreter

    app = FastAPI(title="Stockwise Assistant")
    app.state.assistant = assistant
    app.state.host = host
    app.state.calculator = calculator

    @app.post("/command")
    async def command(request: Request) -> JSONResponse:
        """Interpret one utterance."""
        try:
            body = await _json_body(request)
        except ValueError as exc:
            return _error(str(exc))

        transcript = str(body.get("transcript", "")).strip()
        if not transcript:
            return _error("Missing transcript")
        confidence = body.get("confidence")
        if confidence is not None and (isinstance(confidence, bool) or not isinstance(confidence, (int, float))):
            return _error("confidence must be a number")

        host.drain()
        outcome = interpreter.hear(transcript, confidence=confidence)
        return JSONResponse(
            {
                "status": "success",
                "outcome": to_jsonable(outcome),
                "events": host.drain(),
                "listening": interpreter.is_listening,
            }
        )

    @app.get("/history")
    async def history() -> dict[str, Any]:
        return {
            "last_command": interpreter.last_command,
            "history": to_jsonable(interpreter.conversation_history),
        }

    @app.delete("/history")
    async def clear_history() -> dict[str, str]:
        interpreter.clear_conversation_history()
        return {"status": "success"}

    @app.post("/cost-analysis")
    async def cost_analysis(request: Request) -> JSONResponse:
        """Analyse a posted inventory snapshot; it also backs the assistant's data commands."""
        try:
            body = await _json_body(request)
            rows = body.get("items")
            if not isinstance(rows, list) or not all(isinstance(row, Mapping) for row in rows):
                raise ValueError("items must be a list of objects")
            items = parse_inventory_rows(rows)
        except (ValueError, InventorySnapshotError) as exc:
            return _error(str(exc))

        host.snapshot = items
        report = calculator.generate_cost_analysis(items)
        return JSONResponse({"status": "success", "report": to_jsonable(report)})

    @app.post("/invoice")
    async def invoice(request: Request) -> JSONResponse:
        try:
            body = await _json_body(request)
            items = body.get("items")
            if not isinstance(items, list) or not items:
                raise ValueError("items must be a non-empty list")
            result = calculator.generate_invoice(
                invoice_number=str(body.get("invoice_number") or calculator.next_document_number("INV")),
                customer_info=body.get("customer_info") or {},
                items=items,
                due_date=_parse_date(body.get("due_date"), "due_date"),
                issue_date=_parse_date(body.get("issue_date"), "issue_date"),
                tax_rate=body.get("tax_rate"),
                discount_rate=body.get("discount_rate", 0),
            )
        except (KeyError, TypeError, ValueError) as exc:
            return _error(str(exc))
        return JSONResponse({"status": "success", "invoice": to_jsonable(result)})

    @app.post("/purchase-order")
    async def purchase_order(request: Request) -> JSONResponse:
        try:
            body = await _json_body(request)
            items = body.get("items")
            if not isinstance(items, list) or not items:
                raise ValueError("items must be a non-empty list")
            result = calculator.generate_purchase_order(
                po_number=str(body.get("po_number") or calculator.next_document_number("PO")),
                vendor_info=body.get("vendor_info") or {},
                items=items,
                expected_delivery=_parse_date(body.get("expected_delivery"), "expected_delivery"),
                order_date=_parse_date(body.get("order_date"), "order_date"),
                terms=str(body.get("terms") or "Net 30"),
            )
        except (KeyError, TypeError, ValueError) as exc:
            return _error(str(exc))
        return JSONResponse({"status": "success", "purchase_order": to_jsonable(result)})

    @app.post("/break-even")
    async def break_even(request: Request) -> JSONResponse:
        try:
            body = await _json_body(request)
            result = calculator.calculate_break_even(
                body["fixed_costs"],
                body["variable_cost_per_unit"],
                body["price_per_unit"],
            )
        except KeyError as exc:
            return _error(f"Missing field: {exc.args[0]}")
        except (TypeError, ValueError) as exc:
            return _error(str(exc))
        return JSONResponse({"status": "success", "break_even": to_jsonable(result)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok"}

    logger.debug("Assistant server ready with %d triggers", len(interpreter.triggers))
    return app


if __name__ == "__main__":
    import uvicorn

    from stockwise.runtime.command_rules import load_navigation_commands
    from stockwise.runtime.finance_settings import load_finance_settings

    uvicorn.run(create_app(load_finance_settings(), load_navigation_commands()), host="127.0.0.1", port=8000)
