# Overview: Flask extension instances for the cloud/local databases and migrations.

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

# Default bind: hosted row store. "local" bind: device key-value store (see Config.SQLALCHEMY_BINDS).
db = SQLAlchemy()
migrate = Migrate()
