from flask_cors import CORS

from labubu_store.modules.catalog.store import CatalogStore

# Singletons (initialized in app factory)
cors = CORS()
catalog = CatalogStore()
