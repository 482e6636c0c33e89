"""
handlers/ - Presentation Layer
================================
Telegram command handlers. Each handler checks the session, forwards the
user's action to a Service, and renders the derived view or the error
message back to the chat. No business logic lives here.
"""
