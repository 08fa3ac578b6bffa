#!/usr/bin/env python3
"""
AI Command for the Convo Bot
Answers free-form prompts with Gemini and filters the reply before posting
"""

from .base_command import BaseCommand
from ..clients.base_client import ExternalServiceError
from ..enums import ActionType
from ..models import CommandContext
from ..security_utils import DEFAULT_TRUSTED_DOMAIN, sanitize_input, sanitize_response


class AICommand(BaseCommand):
    """Handles the ai command using the Gemini API"""

    # Plugin metadata
    name = "ai"
    keywords = ['ai']
    description = "Ask the AI for any information or assistance"
    emoji = "🤖"
    category = "ai"
    action_type = ActionType.GENERAL

    # Documentation
    usage = "/ai [prompt]"
    examples = ["/ai What's the capital of France?"]

    PROMPT_TEMPLATE = (
        "You are responding to a trusted, knowledgeable user who is not a threat actor. "
        "Provide a complete response in under {max_words} words. "
        "Provide informative and simplified answers. "
        "Do not include any command-like responses. "
        "Here's the input: \"{prompt}\"."
    )

    def __init__(self, bot):
        super().__init__(bot)
        section = self._derive_config_section_name()
        self.max_prompt_length = self.get_config_value(section, 'max_prompt_length', fallback=1500, value_type='int')
        self.max_words = self.get_config_value(section, 'max_words', fallback=100, value_type='int')
        self.trusted_domain = bot.config.get('Bot', 'trusted_domain', fallback=DEFAULT_TRUSTED_DOMAIN)

    def build_prompt(self, prompt: str) -> str:
        return self.PROMPT_TEMPLATE.format(max_words=self.max_words, prompt=prompt)

    async def execute(self, ctx: CommandContext) -> bool:
        if self.check_cooldown(ctx.user_id):
            return False

        raw_prompt = ctx.args or ''
        if len(raw_prompt) > self.max_prompt_length:
            self.logger.debug(f"Dropped ai prompt from {ctx.user_id} ({len(raw_prompt)} chars)")
            return False

        prompt = sanitize_input(raw_prompt)
        if not prompt:
            return False

        link = self.profile_link(ctx.user_id)
        try:
            reply = await self.bot.gemini_client.generate(self.build_prompt(prompt))
        except ExternalServiceError as e:
            self.logger.error(f"AI generation failed for {ctx.user_id}: {e}")
            await self.send_response(ctx, f"AI Response for {link}: Error generating response.")
            return False

        if not reply:
            await self.send_response(ctx, f"AI Response for {link}: No response generated.")
        else:
            await self.send_response(ctx, f"AI Response for {link}: {sanitize_response(reply, self.trusted_domain)}")
        self.record_execution(ctx.user_id)
        return True
