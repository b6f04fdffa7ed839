import logging
from circdesk.core.db import session
from circdesk.core.models import LibraryAsset, AssetStatus
from circdesk.core.exceptions import AssetNotFoundError

logger = logging.getLogger(__name__)


class AssetStatusStore:
    """Authoritative current status label of each asset."""

    def __init__(self, db=None):
        self.db = db if db is not None else session

    def get_asset(self, asset_id) -> LibraryAsset:
        if asset := self.db.get(LibraryAsset, asset_id):
            return asset
        raise AssetNotFoundError(f"Asset '{asset_id}' does not exist.")

    def get_status(self, asset_id) -> AssetStatus:
        return AssetStatus(self.get_asset(asset_id).status)

    def set_status(self, asset_id, status):
        asset = self.get_asset(asset_id)
        asset.status = AssetStatus(status).value
        self.db.flush()
        logger.debug(f"asset {asset_id} status -> {asset.status}")
        return asset
