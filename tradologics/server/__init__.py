from tradologics.server.webhook import create_app, start

__all__ = ["create_app", "start"]
