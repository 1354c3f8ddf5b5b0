"""Domain layer for the asset ledger.

Services are imported from their modules (``assetledger.domain.ledger`` and
friends) so that the database layer can import ``entities`` and ``errors``
without pulling the services in.
"""
