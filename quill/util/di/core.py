"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from quill.config import CommentSettings, ElasticsearchSettings, Settings
from quill.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_comment_settings(self, settings: Settings) -> CommentSettings:
        """Provide comment engine settings."""
        return settings.comments

    @provide(scope=Scope.APP)
    def provide_elasticsearch_settings(
        self, settings: Settings
    ) -> ElasticsearchSettings:
        """Provide Elasticsearch settings."""
        return settings.elasticsearch
