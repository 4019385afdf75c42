from rest_framework.test import APITestCase

from portfolio.identity import InMemoryIdentityProvider, get_identity_provider

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct horse battery staple"


class AdminAPITestCase(APITestCase):
    """Signs every request in with a bearer token from the in-memory provider."""

    def setUp(self):
        self.provider = get_identity_provider()
        if isinstance(self.provider, InMemoryIdentityProvider):
            self.provider.reset()
        self.identity = self.provider.register(ADMIN_EMAIL, ADMIN_PASSWORD)
        self.token = self.provider.issue_token(self.identity).access_token
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {self.token}")
