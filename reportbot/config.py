import os
from dotenv import load_dotenv

from reportbot.services.resolver import DEFAULT_LOOKUP_TIMEOUT

load_dotenv()


class ConfigError(Exception):
    """Missing or invalid startup configuration"""


def _parse(name, value, convert):
    try:
        return convert(value)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {value!r}") from e


class Config:
    def __init__(self, environ=None):
        env = os.environ if environ is None else environ

        # Telegram
        self.BOT_TOKEN = env.get('BOT_TOKEN')

        # Transport: webhook in production, long polling otherwise
        self.ENVIRONMENT = (env.get('ENVIRONMENT') or env.get('NODE_ENV') or 'development').lower()
        self.WEBHOOK_URL = env.get('WEBHOOK_URL')
        self.RENDER_EXTERNAL_HOSTNAME = env.get('RENDER_EXTERNAL_HOSTNAME')
        self.PORT = _parse('PORT', env.get('PORT') or 3000, int)

        # App
        self.LOOKUP_TIMEOUT = _parse('LOOKUP_TIMEOUT', env.get('LOOKUP_TIMEOUT') or DEFAULT_LOOKUP_TIMEOUT, float)

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == 'production'

    @property
    def webhook_path(self) -> str:
        return f"bot{self.BOT_TOKEN}"

    @property
    def webhook_url(self):
        if self.WEBHOOK_URL:
            return self.WEBHOOK_URL
        if self.RENDER_EXTERNAL_HOSTNAME:
            return f"https://{self.RENDER_EXTERNAL_HOSTNAME}/{self.webhook_path}"
        return None

    def validate(self) -> None:
        if not self.BOT_TOKEN:
            raise ConfigError(
                "BOT_TOKEN not set. Set it in your .env file or in the environment."
            )
        if self.is_production and not self.webhook_url:
            raise ConfigError(
                "Production mode needs WEBHOOK_URL or RENDER_EXTERNAL_HOSTNAME to register the webhook."
            )
