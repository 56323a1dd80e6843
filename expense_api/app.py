"""Flask REST API exposing the expense tracker services."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from expense_core.aggregation import SummaryService
from expense_core.config import Settings
from expense_core.exceptions import ConflictError, NotFoundError, ValidationError
from expense_core.services import CategoryRegistry, ExpenseStore


def _configure_cors(app: Flask, settings: Settings) -> None:
    if settings.is_dev:
        CORS(app, resources={r"/*": {"origins": "*"}}, supports_credentials=True)
    elif settings.allowed_origins:
        origins = list(settings.allowed_origins)
        CORS(app, resources={r"/*": {"origins": origins}}, supports_credentials=True)
    else:
        CORS(app)


def create_app(
    settings: Optional[Settings] = None,
    *,
    expense_store: Optional[ExpenseStore] = None,
    category_registry: Optional[CategoryRegistry] = None,
) -> Flask:
    settings = settings or Settings.from_env()
    app = Flask(__name__)
    _configure_cors(app, settings)

    # One store and registry per application; every handler closes over them.
    expenses = expense_store if expense_store is not None else ExpenseStore()
    categories = (
        category_registry
        if category_registry is not None
        else CategoryRegistry(settings.categories)
    )
    summaries = SummaryService(expenses)
    app.extensions["expense_tracker"] = {
        "settings": settings,
        "expenses": expenses,
        "categories": categories,
        "summaries": summaries,
    }

    def _success(data: Any, status: int = 200, **extra: Any):
        return jsonify({"success": True, "data": data, **extra}), status

    def _failure(message: str, status: int):
        return jsonify({"success": False, "error": message}), status

    def _handle_error(exc: Exception, status: int):
        app.logger.warning("%s %s -> %s: %s", request.method, request.path, status, exc)
        return _failure(str(exc), status)

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400)

    @app.errorhandler(NotFoundError)
    def handle_not_found(exc: NotFoundError):
        return _handle_error(exc, 404)

    @app.errorhandler(ConflictError)
    def handle_conflict(exc: ConflictError):
        return _handle_error(exc, 409)

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        status = exc.code or 500
        message = "Route not found" if status == 404 else exc.description or exc.name
        return _failure(message, status)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return _failure("Internal Server Error", 500)

    def _request_body() -> Dict[str, Any]:
        data: Optional[Any] = request.get_json(silent=True)
        if data is None and request.form:
            data = request.form.to_dict()
        if data is None:
            raise ValidationError("Request body must be a JSON object")
        if not isinstance(data, Mapping):
            raise ValidationError("Request body must be a JSON object")
        return dict(data)

    @app.get("/api/health")
    def health():
        return jsonify({"status": "OK", "message": "Server is running"})

    @app.get("/api/expenses")
    def list_expenses():
        records = expenses.list(request.args.get("category"))
        return _success([expense.to_dict() for expense in records], count=len(records))

    @app.get("/api/expenses/summary")
    def expense_summary():
        summary = summaries.summarize()
        return jsonify({"success": True, **summary.to_dict()})

    @app.post("/api/expenses")
    def create_expense():
        expense = expenses.create(_request_body())
        return _success(expense.to_dict(), 201, message="Expense added successfully")

    @app.get("/api/expenses/<expense_id>")
    def get_expense(expense_id: str):
        return _success(expenses.get(expense_id).to_dict())

    @app.put("/api/expenses/<expense_id>")
    def update_expense(expense_id: str):
        expenses.get(expense_id)
        # An empty body changes nothing.
        payload = _request_body() if request.get_data() else {}
        expense = expenses.update(expense_id, payload)
        return _success(expense.to_dict(), message="Expense updated successfully")

    @app.delete("/api/expenses/<expense_id>")
    def delete_expense(expense_id: str):
        expense = expenses.delete(expense_id)
        return _success(expense.to_dict(), message="Expense deleted successfully")

    @app.get("/api/categories")
    def list_categories():
        return _success(categories.list())

    @app.post("/api/categories")
    def create_category():
        name = categories.create(_request_body().get("name"))
        return _success(name, 201, message="Category created successfully")

    return app
