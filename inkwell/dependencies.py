"""FastAPI dependencies — hand the app's blog and recommender to routes."""

from fastapi import Request

from inkwell.config import Settings
from inkwell.services.blog import Blog
from inkwell.services.suggestions import Recommender


def get_blog(request: Request) -> Blog:
    return request.app.state.blog


def get_recommender(request: Request) -> Recommender:
    return request.app.state.recommender


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
