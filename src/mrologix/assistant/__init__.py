"""AI chat assistant: function registry, dispatcher and the tool-calling loop.

The assistant only reads from the record store. Every function the model may
call is declared in :mod:`mrologix.assistant.registry`.
"""
