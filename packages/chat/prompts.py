from typing import Any, Dict, List

SYSTEM_PROMPT = """
The user is not a developer and does not know SQL.
Always send text using Markdown. Send short answers, only longer if the user requests it.
Use the user's data, found in the database to answer the user's questions, the data will be returned to you and use this data to create a better answer.
You're a professional accounting assistant, your job is to give the best recommendations and meet the user's needs.
"""


def build_tools(version: str, db_schema: str) -> List[Dict[str, Any]]:
    """Tool definitions for a client schema version.

    Every version currently shares one ``ask_database`` tool.
    """
    return [
        {
            "type": "function",
            "function": {
                "name": "ask_database",
                "description": (
                    "Use this function to answer user questions. "
                    "Input should be a fully formed SQLite query."
                ),
                "parameters": {
                    "type": "object",
                    "properties": {
                        "query": {
                            "type": "string",
                            "description": (
                                "SQL query extracting info to answer the user's question.\n"
                                "SQL should be written using this database schema:\n"
                                f"{db_schema}\n"
                                "The query should be returned in plain text, not in JSON."
                            ),
                        }
                    },
                    "required": ["query"],
                },
            },
        }
    ]
