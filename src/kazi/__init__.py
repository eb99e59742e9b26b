"""Kazi - a conversational todo list manager driven by an LLM.

Kazi runs a chat loop in the terminal. Each request is handed to a language
model that answers with one structured JSON message per step (plan, action
or output). Actions are dispatched to a small set of todo tools backed by a
SQLite table and their results are fed back to the model as observations.

Key modules:

- :mod:`kazi.agent` - Conversation engine, structured messages, dispatch, prompt
- :mod:`kazi.tools` - Tool schemas and the immutable tool registry
- :mod:`kazi.todos` - SQLite todo store
- :mod:`kazi.llm` - LLM client abstraction (Gemini, OpenAI-compatible servers)
"""

__version__ = "0.1.0"
