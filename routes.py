# routes.py
from fastapi import FastAPI
from controller.quiz_controller import quiz_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(quiz_router)
