class Service:
    def __init__(self, store):
        self.store = store

    def fetch(self, key):
        if key in self.store:
            return self.store[key]
        return None

    async def refresh(self, keys):
        async def load(k):
            return k

        for k in keys:
            await load(k)
