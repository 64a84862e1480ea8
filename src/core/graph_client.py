"""
MS Graph client setup.

The credential is shared; a client is built per run because each run drives
the async SDK on its own event loop.
"""

from azure.identity import ClientSecretCredential
from msgraph import GraphServiceClient

from core.config import GRAPH_APP_ID, GRAPH_CLIENT_SECRET, GRAPH_TENANT_ID

GRAPH_SCOPES = ["https://graph.microsoft.com/.default"]

_credential: ClientSecretCredential | None = None


def get_credential() -> ClientSecretCredential:
    """Get or create the app credential (lazy initialization)."""
    global _credential
    if _credential is None:
        if not (GRAPH_TENANT_ID and GRAPH_APP_ID and GRAPH_CLIENT_SECRET):
            raise RuntimeError("MS Graph credentials are not configured (MICROSOFT_GRAPH_* variables)")
        _credential = ClientSecretCredential(
            tenant_id=GRAPH_TENANT_ID,
            client_id=GRAPH_APP_ID,
            client_secret=GRAPH_CLIENT_SECRET,
        )
    return _credential


def create_graph_client() -> GraphServiceClient:
    """Create an MS Graph client for the current event loop."""
    return GraphServiceClient(credentials=get_credential(), scopes=GRAPH_SCOPES)
