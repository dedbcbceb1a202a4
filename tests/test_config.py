"""Tests for configuration loading."""
import logging
from pathlib import Path

from asset_prefetch.config import DEFAULT_GRAPHQL_ENDPOINT, PLAYER_IMAGE_TEMPLATE, Settings


class TestFromEnv:
    """Tests for Settings.from_env."""

    def test_defaults(self):
        """Test an empty environment gives the documented defaults."""
        settings = Settings.from_env({})

        assert settings.graphql_endpoint == DEFAULT_GRAPHQL_ENDPOINT == 'http://localhost:3000/graphql'
        assert settings.concurrency == 5
        assert settings.download_timeout == 0
        assert settings.player_image_template == PLAYER_IMAGE_TEMPLATE
        assert settings.fail_on_download_errors is False
        assert settings.players_dir == Path('public') / 'images' / 'players'
        assert settings.tournaments_dir == Path('public') / 'images' / 'tournaments'
        assert settings.validate() == []

    def test_empty_endpoint_uses_default(self):
        """Test a blank endpoint variable is treated as unset."""
        assert Settings.from_env({'PUBLIC_GRAPHQL_ENDPOINT': ''}).graphql_endpoint == DEFAULT_GRAPHQL_ENDPOINT

    def test_overrides(self):
        """Test environment values are parsed."""
        settings = Settings.from_env({
            'PUBLIC_GRAPHQL_ENDPOINT': 'https://api.example/graphql',
            'OUTPUT_ROOT': 'dist',
            'CONCURRENCY': '8',
            'DOWNLOAD_TIMEOUT': '12.5',
            'FAIL_ON_DOWNLOAD_ERRORS': 'Yes',
            'LOG_LEVEL': 'debug',
        })

        assert settings.graphql_endpoint == 'https://api.example/graphql'
        assert settings.images_dir == Path('dist') / 'images'
        assert settings.concurrency == 8
        assert settings.download_timeout == 12.5
        assert settings.fail_on_download_errors is True
        assert settings.get_log_level() == logging.DEBUG


class TestValidate:
    """Tests for Settings.validate."""

    def test_reports_every_problem(self):
        """Test all invalid values are listed."""
        settings = Settings(
            graphql_endpoint='localhost:3000',
            concurrency=0,
            download_timeout=-1,
            player_image_template='https://cdn/headshot',
        )

        errors = settings.validate()

        assert len(errors) == 4
        assert any('CONCURRENCY' in e for e in errors)
        assert any('PLAYER_IMAGE_TEMPLATE' in e for e in errors)

    def test_unknown_log_level_falls_back(self):
        """Test an unknown level name maps to INFO."""
        assert Settings(log_level='chatty').get_log_level() == logging.INFO
