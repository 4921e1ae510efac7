class DataSourceError(Exception):
    """An upstream reporting view could not be read."""

    def __init__(self, dataset: str, message: str):
        self.dataset = dataset
        super().__init__(f"Failed to fetch {dataset}: {message}")
