"""Gerarchia di eccezioni per i livelli esterni (configurazione, dati, Parole)."""


class GiocaParoleError(Exception):
    """Eccezione base dell'applicazione."""


class ConfigError(GiocaParoleError):
    """data/config.json esiste ma non è utilizzabile."""


class DataLoadError(GiocaParoleError):
    """File di categorie o di parole mancante o malformato."""


class CategoryNotFoundError(GiocaParoleError):
    """Id di categoria assente dal catalogo."""


class InvalidGuessError(GiocaParoleError):
    """Tentativo di Parole di lunghezza errata o non presente nel dizionario."""
