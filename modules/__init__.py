# tools
from .utils import utils, choose_mode, TgReport
from .database import DataBase
from .browser import Browser
from .wallet import Wallet

# modules
from .auth import Authenticator
from .scheduler import Scheduler, Account
