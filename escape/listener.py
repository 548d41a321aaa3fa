import json
import logging
import os

from openai import OpenAI, OpenAIError

logger = logging.getLogger(__name__)


class Listener:
    def __init__(self, model_name="gpt-5-nano", client=None):
        """
        Optional translator from free text to one of the engine's commands.
        Only consulted for input the Director does not understand.
        """
        self.client = client or OpenAI(api_key=os.getenv("OPENAI_API_KEY"))
        self.model = model_name

    def translate(self, user_input, valid_commands, room_context):
        """
        Returns a command line from valid_commands, or None if no mapping was made.
        """
        commands_str = "\n".join(f"- {cmd}" for cmd in valid_commands)
        system_prompt = f"""
        ROLE: You are the Game Engine Interface for a text adventure.
        TASK: Translate the player's input into exactly ONE of the Valid Commands.

        ### CURRENT ROOM (Truth)
        {room_context}

        ### VALID COMMANDS
        {commands_str}

        ### RULES
        1. Output **VALID JSON ONLY** with a single key "command".
        2. The value MUST be copied verbatim from the Valid Commands list.
        3. If nothing fits, return {{"command": null}}.
        """

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_input}
                ],
                response_format={"type": "json_object"},
            )
            content = json.loads(response.choices[0].message.content)
        except OpenAIError as e:
            logger.warning("Listener request failed: %s", e)
            return None
        except (json.JSONDecodeError, TypeError, IndexError) as e:
            logger.warning("Listener returned unusable content: %s", e)
            return None

        command = content.get("command") if isinstance(content, dict) else None
        if not command or command not in valid_commands:
            logger.debug("Listener offered no valid command for %r (got %r)", user_input, command)
            return None
        return command
