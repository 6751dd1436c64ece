from fastapi import Request


def get_store(request: Request):
    """The engine the app was started with; tests swap it by building their own app."""
    return request.app.state.engine
