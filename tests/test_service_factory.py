"""
Tests for ServiceFactory service resolution.
"""

import threading
from unittest.mock import MagicMock

import pytest

from oauth_factory.core.exceptions import InvalidServiceType, UnsupportedOperation
from oauth_factory.core.oauth_service import OAuth1Service, OAuth2Service
from oauth_factory.infrastructure import oauth1_services, oauth2_services
from oauth_factory.infrastructure.http_transport import HttpxTransport
from oauth_factory.infrastructure.signature import Signature
from oauth_factory.oauth.factory import ServiceFactory

from tests.conftest import ExampleOAuth1, ExampleOAuth2, NotAService


class TestVersionPreference:
    """Tests for choosing between OAuth1 and OAuth2 implementations."""

    def test_builtin_oauth2(self, factory, credentials, storage):
        service = factory.create_service("github", credentials, storage)

        assert isinstance(service, oauth2_services.GitHub)

    def test_builtin_oauth1(self, factory, credentials, storage):
        service = factory.create_service("twitter", credentials, storage)

        assert isinstance(service, oauth1_services.Twitter)

    def test_oauth2_preferred_when_both_exist(self, factory, credentials, storage):
        """Test Bitbucket, which exists in both versions, resolves to OAuth2."""
        service = factory.create_service("bitbucket", credentials, storage)

        assert isinstance(service, oauth2_services.Bitbucket)

    def test_oauth2_preferred_over_custom_oauth1(self, factory, credentials, storage):
        factory.register_service("github", ExampleOAuth1)

        service = factory.create_service("github", credentials, storage)

        assert isinstance(service, oauth2_services.GitHub)

    def test_custom_oauth2_preferred_over_builtin_oauth1(self, factory, credentials, storage):
        factory.register_service("twitter", ExampleOAuth2)

        service = factory.create_service("twitter", credentials, storage)

        assert isinstance(service, ExampleOAuth2)


class TestCustomRegistration:
    """Tests for custom registrations through the factory."""

    def test_custom_overrides_builtin(self, factory, credentials, storage):
        factory.register_service("github", ExampleOAuth2)

        service = factory.create_service("github", credentials, storage)

        assert isinstance(service, ExampleOAuth2)

    def test_register_returns_factory(self, factory):
        assert factory.register_service("example", ExampleOAuth2) is factory

    def test_register_by_import_path(self, factory, credentials, storage):
        factory.register_service("hub", "oauth_factory.infrastructure.oauth2_services:GitHub")

        service = factory.create_service("hub", credentials, storage)

        assert isinstance(service, oauth2_services.GitHub)

    def test_invalid_registration(self, factory, credentials, storage):
        with pytest.raises(InvalidServiceType):
            factory.register_service("example", NotAService)

        assert factory.create_service("example", credentials, storage) is None

    def test_factories_do_not_share_registrations(self, credentials, storage):
        first = ServiceFactory(http_transport=MagicMock())
        second = ServiceFactory(http_transport=MagicMock())

        first.register_service("example", ExampleOAuth2)

        assert isinstance(first.create_service("example", credentials, storage), ExampleOAuth2)
        assert second.create_service("example", credentials, storage) is None

    def test_empty_defaults(self, credentials, storage):
        factory = ServiceFactory(http_transport=MagicMock(), defaults={})

        assert factory.create_service("github", credentials, storage) is None


class TestNameHandling:
    """Tests for provider name case handling."""

    def test_first_character_case_insensitive(self, factory, credentials, storage):
        lower = factory.create_service("github", credentials, storage)
        upper = factory.create_service("Github", credentials, storage)

        assert type(lower) is type(upper)

    def test_registration_name_normalized(self, factory, credentials, storage):
        factory.register_service("example", ExampleOAuth2)

        assert isinstance(factory.create_service("Example", credentials, storage), ExampleOAuth2)

    def test_rest_of_name_is_case_sensitive(self, factory, credentials, storage):
        assert factory.create_service("GITHUB", credentials, storage) is None

    def test_github_spelling_alias(self, factory, credentials, storage):
        """Test the provider's own spelling resolves like the normalized one."""
        for name in ("GitHub", "gitHub", "github", "Github"):
            assert isinstance(
                factory.create_service(name, credentials, storage), oauth2_services.GitHub
            )


class TestScopes:
    """Tests for scope handling during creation."""

    def test_scopes_resolved_for_oauth2(self, factory, credentials, storage):
        factory.register_service("example", ExampleOAuth2)

        service = factory.create_service("example", credentials, storage, ["email", "xyz"])

        assert service.scopes == ["user:email", "xyz"]

    def test_builtin_scopes_resolved(self, factory, credentials, storage):
        service = factory.create_service("github", credentials, storage, ["user_email", "repo"])

        assert service.scopes == ["user:email", "repo"]

    def test_scopes_on_oauth1_rejected(self, factory, credentials, storage):
        with pytest.raises(UnsupportedOperation, match="OAuth1"):
            factory.create_service("twitter", credentials, storage, ["email"])

    def test_no_scopes_on_oauth1_accepted(self, factory, credentials, storage):
        assert isinstance(factory.create_service("twitter", credentials, storage, []), OAuth1Service)
        assert isinstance(factory.create_service("twitter", credentials, storage), OAuth1Service)

    def test_scopes_not_shared_between_services(self, factory, credentials, storage):
        first = factory.create_service("github", credentials, storage, ["repo"])
        second = factory.create_service("github", credentials, storage)

        assert first.scopes == ["repo"]
        assert second.scopes == []


class TestConstruction:
    """Tests for the dependencies handed to constructed services."""

    def test_oauth2_dependencies(self, factory, mock_transport, credentials, storage):
        service = factory.create_service("google", credentials, storage)

        assert isinstance(service, OAuth2Service)
        assert service.credentials is credentials
        assert service.http_transport is mock_transport
        assert service.storage is storage

    def test_oauth1_receives_signature(self, factory, mock_transport, credentials, storage):
        service = factory.create_service("tumblr", credentials, storage)

        assert service.credentials is credentials
        assert service.http_transport is mock_transport
        assert service.storage is storage
        assert isinstance(service.signature, Signature)
        assert service.signature.credentials is credentials

    def test_unknown_provider_returns_none(self, factory, credentials, storage):
        assert factory.create_service("nonexistent", credentials, storage) is None

    def test_unknown_provider_with_scopes_returns_none(self, factory, credentials, storage):
        assert factory.create_service("nonexistent", credentials, storage, ["email"]) is None

    def test_repeated_calls_build_independent_services(self, factory, credentials, storage):
        first = factory.create_service("github", credentials, storage, ["repo"])
        second = factory.create_service("github", credentials, storage, ["repo"])

        assert first is not second
        assert first.scopes == second.scopes
        assert first.credentials is second.credentials


class TestHttpTransport:
    """Tests for transport selection."""

    def test_default_transport_created_once(self, credentials, storage):
        transport_factory = MagicMock()
        factory = ServiceFactory(transport_factory=transport_factory)

        first = factory.create_service("github", credentials, storage)
        second = factory.create_service("twitter", credentials, storage)

        transport_factory.assert_called_once_with()
        assert first.http_transport is second.http_transport

    def test_default_transport_created_for_unknown_provider(self, credentials, storage):
        transport_factory = MagicMock()
        factory = ServiceFactory(transport_factory=transport_factory)

        factory.create_service("nonexistent", credentials, storage)

        transport_factory.assert_called_once_with()

    def test_default_transport_is_httpx(self, credentials, storage):
        factory = ServiceFactory()

        service = factory.create_service("github", credentials, storage)

        assert isinstance(service.http_transport, HttpxTransport)

    def test_set_http_transport(self, credentials, storage):
        transport = MagicMock()
        factory = ServiceFactory()

        assert factory.set_http_transport(transport) is factory
        assert factory.create_service("github", credentials, storage).http_transport is transport

    def test_close_only_closes_own_transport(self):
        supplied = MagicMock()
        factory = ServiceFactory(http_transport=supplied)

        factory.close()

        supplied.close.assert_not_called()

    def test_close_closes_default_transport(self):
        created = MagicMock()
        factory = ServiceFactory(transport_factory=lambda: created)
        factory.get_http_transport()

        factory.close()

        created.close.assert_called_once_with()


class HybridOAuth1First(ExampleOAuth1, ExampleOAuth2):
    """Provider deriving from both capability sets, OAuth1 base listed first."""

    pass


class HybridOAuth2First(ExampleOAuth2, ExampleOAuth1):
    """Provider deriving from both capability sets, OAuth2 base listed first."""

    pass


class TestHybridServices:
    """Tests for classes deriving from both OAuth1Service and OAuth2Service."""

    @pytest.mark.parametrize("service_class", [HybridOAuth1First, HybridOAuth2First])
    def test_built_as_oauth2_with_scopes(self, service_class, factory, mock_transport, credentials, storage):
        factory.register_service("hybrid", service_class)

        service = factory.create_service("hybrid", credentials, storage, ["email", "xyz"])

        assert isinstance(service, service_class)
        assert service.scopes == ["user:email", "xyz"]
        assert service.signature is None
        assert service.credentials is credentials
        assert service.http_transport is mock_transport
        assert service.storage is storage

    @pytest.mark.parametrize("service_class", [HybridOAuth1First, HybridOAuth2First])
    def test_built_without_scopes(self, service_class, factory, credentials, storage):
        factory.register_service("hybrid", service_class)

        service = factory.create_service("hybrid", credentials, storage)

        assert service.scopes == []


class TestConcurrency:
    """Tests for concurrent use of one factory."""

    THREADS = 16

    def _run_together(self, target):
        barrier = threading.Barrier(self.THREADS)
        errors = []

        def worker(index):
            barrier.wait()
            try:
                target(index)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(self.THREADS)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        return errors

    def test_default_transport_created_once_across_threads(self, credentials, storage):
        created = []

        def transport_factory():
            # Widen the window between the None check and the assignment
            threading.Event().wait(0.01)
            transport = MagicMock()
            created.append(transport)
            return transport

        factory = ServiceFactory(transport_factory=transport_factory)
        services = []

        errors = self._run_together(
            lambda i: services.append(factory.create_service("github", credentials, storage))
        )

        assert errors == []
        assert len(created) == 1
        assert len(services) == self.THREADS
        assert all(service.http_transport is created[0] for service in services)

    def test_concurrent_registrations_all_kept(self, credentials, storage):
        factory = ServiceFactory(http_transport=MagicMock(), defaults={})

        errors = self._run_together(
            lambda i: factory.register_service(f"provider{i}", ExampleOAuth2)
        )

        assert errors == []
        for i in range(self.THREADS):
            assert isinstance(
                factory.create_service(f"provider{i}", credentials, storage), ExampleOAuth2
            )

    def test_concurrent_registration_of_one_name(self, credentials, storage):
        factory = ServiceFactory(http_transport=MagicMock(), defaults={})

        errors = self._run_together(
            lambda i: factory.register_service(
                "shared", ExampleOAuth2 if i % 2 else ExampleOAuth1
            )
        )

        assert errors == []
        service = factory.create_service("shared", credentials, storage)
        assert isinstance(service, (ExampleOAuth1, ExampleOAuth2))
