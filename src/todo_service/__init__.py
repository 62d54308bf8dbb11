"""
Todo service package.

An in-memory task-tracking API built on FastAPI. Users register, then create,
list, update, complete and delete their own todos; the acting user is named
by a request header. Build the app with `todo_service.main.create_app`.
"""
