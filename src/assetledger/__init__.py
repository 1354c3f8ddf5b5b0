"""Asset ledger: track asset values over time from the command line."""


def __getattr__(name):
    # The CLI is imported on demand so the domain and database layers stay light
    if name == "main":
        from assetledger.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
