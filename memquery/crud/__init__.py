from .cascade import CascadeDeleter
from .service import ResourceService
