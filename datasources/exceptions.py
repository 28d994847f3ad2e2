# datasources/exceptions.py

class DataSourceError(Exception):
    pass


class StoreUnavailable(DataSourceError):
    pass


class AllowListError(DataSourceError):
    pass


class AllowListUnavailable(AllowListError):
    pass


class AllowListRequestFailed(AllowListError):
    pass
