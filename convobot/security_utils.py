#!/usr/bin/env python3
"""
Security Utilities for the Convo Bot
Filters AI-generated replies and validates user input and API keys
"""

import logging
import re
from typing import List, Pattern
from urllib.parse import urlparse

logger = logging.getLogger('ConvoBot.Security')

DEFAULT_TRUSTED_DOMAIN = 'hackforums.net'

# Chat commands the bot must never be tricked into issuing
DISALLOWED_COMMANDS: List[str] = ['/flip', '/jackpot', '/rain', '/help', '/invite']

MANIPULATION_PATTERNS: List[Pattern] = [
    re.compile(r'only\s*respond\s*with', re.IGNORECASE),
    re.compile(r'just\s*say', re.IGNORECASE),
    re.compile(r'respond\s*with\s*exactly', re.IGNORECASE),
    re.compile(r'reply\s*with', re.IGNORECASE),
    re.compile(r'simply\s*respond', re.IGNORECASE),
    re.compile(r'translate.*and\s*only\s*respond', re.IGNORECASE),
    re.compile(r'no\s*additional\s*text', re.IGNORECASE),
    re.compile(r'respond\s*without\s*any\s*other\s*words', re.IGNORECASE),
    re.compile(r'merely\s*reply\s*with', re.IGNORECASE),
    re.compile(r'strictly\s*respond', re.IGNORECASE),
]

URL_PATTERN = re.compile(r'https?://[^\s]+', re.IGNORECASE)

BLOCKED_MESSAGE = 'The response contained disallowed content and was blocked for safety.'
MANIPULATION_MESSAGE = 'You are being naughty for trying to manipulate the AI. No troublemaking!'
LINKS_MESSAGE = 'Links are not allowed in general responses. Please avoid including URLs.'
TAGGING_MESSAGE = 'Tagging with @ symbols is not allowed.'


def is_trusted_url(url: str, trusted_domain: str = DEFAULT_TRUSTED_DOMAIN) -> bool:
    """Check whether a URL's host is the trusted domain or one of its subdomains.

    Args:
        url: URL found in a reply.
        trusted_domain: Domain that links may point to.

    Returns:
        bool: True if the host matches, False otherwise (including unparseable URLs).
    """
    try:
        host = (urlparse(url).hostname or '').lower()
    except ValueError:
        return False
    trusted = trusted_domain.lower()
    return host == trusted or host.endswith('.' + trusted)


def sanitize_response(text: str, trusted_domain: str = DEFAULT_TRUSTED_DOMAIN) -> str:
    """
    Filter AI-generated text before it is posted to chat

    Rules are applied in order and the first match wins:
    disallowed command, manipulation phrase, untrusted link, @ mention.

    Args:
        text: Generated reply text
        trusted_domain: Domain links are allowed to point to

    Returns:
        The original text, or a fixed replacement message
    """
    for command in DISALLOWED_COMMANDS:
        if command in text:
            logger.warning(f"Blocked reply containing disallowed command {command}")
            return BLOCKED_MESSAGE

    for pattern in MANIPULATION_PATTERNS:
        if pattern.search(text):
            logger.warning(f"Blocked reply matching manipulation pattern {pattern.pattern!r}")
            return MANIPULATION_MESSAGE

    for url in URL_PATTERN.findall(text):
        url = url.rstrip('.,;:!?)]}\'"')
        if not is_trusted_url(url, trusted_domain):
            logger.info(f"Blocked reply containing untrusted link: {url}")
            return LINKS_MESSAGE

    if '@' in text:
        return TAGGING_MESSAGE

    return text


def sanitize_input(content: str, strip_controls: bool = True) -> str:
    """
    Clean user input before it is forwarded to an external API

    Args:
        content: Input string to sanitize
        strip_controls: Whether to remove control characters (default: True)

    Returns:
        Sanitized string
    """
    if not isinstance(content, str):
        content = str(content)

    # Keep only printable characters plus common whitespace
    if strip_controls:
        content = ''.join(
            char for char in content
            if ord(char) >= 32 or char in '\n\r\t'
        )

    content = content.replace('\x00', '')

    return content.strip()


def validate_api_key_format(api_key: str, min_length: int = 16) -> bool:
    """
    Validate API key format

    Args:
        api_key: API key to validate
        min_length: Minimum required length (default: 16)

    Returns:
        True if format is valid, False otherwise
    """
    if not isinstance(api_key, str):
        return False

    if len(api_key) < min_length:
        return False

    invalid_patterns = [
        'your_api_key_here',
        'placeholder',
        'example',
        'test_key',
        '12345',
        'aaaa',
        'key(free)',
    ]

    api_key_lower = api_key.lower()
    if any(pattern in api_key_lower for pattern in invalid_patterns):
        return False

    if len(set(api_key)) < 3:
        return False

    return True
