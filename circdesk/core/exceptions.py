class CirculationError(Exception): pass

class NotFoundError(CirculationError): pass

class AssetNotFoundError(NotFoundError): pass

class CardNotFoundError(NotFoundError): pass

class DatabaseCommitError(CirculationError): pass
