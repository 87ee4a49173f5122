from .query_settings_handler import QuerySettingsHandler
from .settings_dict import QuerySettingsDict, ServiceSettingsDict
from .path import ABSENT, resolve_path
from .compare import compare_values, coerce_query_value, same_id
from .inflect import pluralize, singularize
