from collections.abc import Iterable
from pathlib import Path
import json
import logging

import google.auth
import google.auth.exceptions
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build, Resource
import googleapiclient.discovery_cache as gws_discovery_cache

logger = logging.getLogger(__name__)

class GWSAccess():
    """
    Authenticated access to Google Workspace services.
    See https://developers.google.com/workspace/guides/create-credentials
    for what you'll need.  Point client_secrets at the OAuth client file
    Google gives you and the first connect() runs the consent flow in a
    browser.  The resulting tokens are kept in cred_cache and refreshed from
    there on later runs so consent does not have to happen every time.
    With no secrets file, google.auth.default() is tried last, which picks
    up GOOGLE_APPLICATION_CREDENTIALS and the cloud default locations.

    Create one and hand its services to whatever needs them, e.g.
    GoogleSpreadSheetTable.connect(spreadsheet_id, access).
    """

    __SCOPES = {
        "sheets": "https://www.googleapis.com/auth/spreadsheets",
        "sheets-ro": "https://www.googleapis.com/auth/spreadsheets.readonly",
        "drive-file": "https://www.googleapis.com/auth/drive.file",
        "drive": "https://www.googleapis.com/auth/drive",
        "drive-ro": "https://www.googleapis.com/auth/drive.readonly",
        "openid": "openid",
        "email": "email",
        "profile": "profile"
    }
    __SCOPE_URL_PREFIX = "https://www.googleapis.com/"

    __DEFAULT_AUTH_PROMPT_MSG = "Please visit this URL to authorize access to your spreadsheets: {url}"
    __DEFAULT_AUTH_FLOW_SUCCESS_MSG = "Authorization complete, you may close this window."
    __DEFAULT_SECRETS = Path.home() / "gws_client_secrets.json"
    __DEFAULT_CACHE = Path.home() / "gws_tokens.json"

    def __init__(self, scopes: None|Iterable[str]|str = "sheets", config: dict|None = None) -> None:
        self.reset()
        self.scopes = scopes
        if config:
            self.config = config

    @classmethod
    def from_config_file(cls, path: Path|str):
        """
        Create from a JSON file holding the same keys as the config property.
        """
        with open(Path(path), 'r', encoding='utf-8') as f:
            config = json.load(f)
        if not isinstance(config, dict):
            raise ValueError(f"config file {path} must hold a JSON object")
        return cls(config.get('scopes', "sheets"), config)

    def __bool__(self) -> bool:
        """True is we are connected and authenticated"""
        return self.connected

    def __str__(self) -> str:
        if self.connected:
            return f"Connected:{str(self.session_scopes)}"
        return f"Disconnected:{str(self.__scopes)}"

    def __repr__(self) -> str:
        return f"{str(self.__class__)}:{str(self)}"

    @classmethod
    def get_scope(cls, scope: str) -> str:
        """
        Get a scope based on simplified label.
        A raw URL will also be expected.
        """
        s = str(scope)
        sc = cls.__SCOPES.get(s, "")
        if not sc and s.startswith(cls.__SCOPE_URL_PREFIX):
            sc = s
        return sc

    @property
    def client_secrets(self) -> Path:
        """
        Path to client secrets file as provided by Google when generating access credentials.
        """
        return self.__secrets

    @client_secrets.setter
    def client_secrets(self, value: Path|str) -> None:
        """If this changes we need to reconnect as we have new credentials."""
        val = Path(value)
        if val != self.__secrets:
            self.__secrets = val
            if self.connected:
                self.connect()

    @property
    def cred_cache(self) -> Path:
        """
        Path to local credential cache to not have to do full authentication each time.
        """
        return self.__cache

    @cred_cache.setter
    def cred_cache(self, value: Path|str) -> None:
        """If this changes we need to reconnect as the cache is now invalid."""
        val = Path(value)
        if val != self.__cache:
            self.__cache = val
            if self.connected:
                self.connect()

    @property
    def connected(self) -> bool:
        """
        Are we authenticated with Google?
        """
        return bool(self.__creds) and bool(self.__creds.valid)

    @property
    def session_scopes(self) -> list[str]:
        """
        Scopes authenticated by Google for this session.
        This differs to self.scopes as that is what is requested or to be requested.
        """
        if self.connected:
            return list(self.__creds.scopes or [])
        return []

    @property
    def scopes(self) -> list[str]:
        """
        The scopes requested or to be requested on next authentication sequence.
        """
        return self.__scopes

    @scopes.setter
    def scopes(self, value: None|Iterable[str]|str) -> None:
        """
        Override the list of requested scopes.  Labels that aren't known and
        aren't a googleapis URL are dropped.  A live session that doesn't
        cover the new scopes is reconnected straight away, an empty list
        drops the session.
        """
        values = [] if value is None else [value] if isinstance(value, str) else list(value)
        slist = []
        for v in values:
            s = self.get_scope(str(v))
            if s:
                if s not in slist:
                    slist.append(s)
            else:
                logger.warning("ignoring unknown scope %r", v)
        self.__scopes = slist
        self.__services = {}
        if self.__scopes and self.connected:
            self.refresh()
        else:
            self.__creds = None

    def append_scopes(self, *args) -> bool:
        """
        Add to the current scope list, reconnecting if the session doesn't
        already cover them.
        """
        for a in args:
            b = [a] if isinstance(a, str) else a
            for i in b:
                s = self.get_scope(str(i))
                if s and s not in self.__scopes:
                    self.__scopes.append(s)
        return self.refresh()

    def scope_in_session(self, scope: str) -> bool:
        """
        Is the specified scope in the currently authenicated session?
        """
        s = self.get_scope(scope)
        return bool(s) and self.connected and (s in self.session_scopes)

    @property
    def creds(self):
        """
        Current active access credentials or None
        """
        return self.__creds

    @property
    def config(self) -> dict:
        """
        Get all configuration state as a dict.
        Convenience for getting it all at once for pushing into a json file.
        """
        return {
            'secrets': str(self.__secrets),
            'cache': str(self.__cache),
            'scopes': list(self.__scopes),
            'server': self.auth_server,
            'port': self.auth_port,
            'developer_key': self.__developer_key
        }

    @config.setter
    def config(self, config: dict) -> None:
        """
        Set configuration state from a dict.
        Keys that are missing are left as they are.
        """
        reconnect = False
        v = config.get('port', None)
        if v is not None:
            self.auth_port = int(v)
        v = config.get('server', None)
        if v is not None:
            self.auth_server = str(v)
        v = config.get('scopes', [])
        if v:
            self.scopes = v
        v = config.get('cache', None)
        if v is not None:
            self.__cache = Path(v)
            reconnect = True
        v = config.get('secrets', None)
        if v is not None:
            self.__secrets = Path(v)
            reconnect = True
        v = config.get('developer_key', None)
        if v is not None:
            self.developer_key = v
        v = config.get('auth_prompt_msg', None)
        if v is not None:
            self.auth_prompt_msg = str(v)
        v = config.get('flow_success_msg', None)
        if v is not None:
            self.auth_flow_success_msg = str(v)
        if reconnect and self.connected:
            self.connect()

    @property
    def developer_key(self) -> str|None:
        """API key, sent along with requests built from here"""
        return self.__developer_key

    @developer_key.setter
    def developer_key(self, value: str|None) -> None:
        v = value if value is None else str(value)
        if v != self.__developer_key:
            self.__services = {}
            self.__developer_key = v

    def reset(self) -> None:
        """
        Reset all connection state to defaults.
        """
        self.__secrets = self.__DEFAULT_SECRETS
        self.__cache = self.__DEFAULT_CACHE
        self.__discovery_cache = gws_discovery_cache.autodetect()
        self.__creds = None
        self.__scopes = []
        self.__services = {}
        self.__developer_key = None
        self.auth_server = 'localhost'
        self.auth_port = 0
        self.auth_prompt_msg = self.__DEFAULT_AUTH_PROMPT_MSG
        self.auth_flow_success_msg = self.__DEFAULT_AUTH_FLOW_SUCCESS_MSG

    def refresh(self) -> bool:
        """
        If the requested scopes are not all in the current session, reconnect.
        """
        scopes_accounted = all(s in self.session_scopes for s in self.__scopes)
        if self.connected and not scopes_accounted:
            return self.connect()
        return True

    def _load_cache(self, requested_scopes: list[str]) -> None:
        """
        Pick up cached credentials, unless they were granted for a different
        set of scopes in which case the cache is thrown away.
        """
        if not (self.__cache.exists() and self.__cache.is_file()):
            return
        cf = self.__cache.resolve()
        with open(cf, 'r', encoding='utf-8') as f:
            cached_scopes = json.load(f).get('scopes', [])
        if all(s in cached_scopes for s in requested_scopes):
            self.__creds = Credentials.from_authorized_user_file(str(cf), requested_scopes)
        else:
            logger.info("cached credentials do not cover %s, discarding", requested_scopes)
            self.__cache.unlink()

    def _save_cache(self, requested_scopes: list[str]) -> None:
        # only user credentials from the OAuth flow can be refreshed from a cache
        refresh_token = getattr(self.__creds, 'refresh_token', None)
        if not refresh_token:
            return
        user_info = {'refresh_token': refresh_token, 'client_id': self.__creds.client_id,
                     'client_secret': self.__creds.client_secret, 'scopes': requested_scopes}
        with open(self.__cache.resolve(), 'w', encoding='utf-8') as f:
            json.dump(user_info, f, ensure_ascii=False, indent=2)

    def connect(self) -> bool:
        """
        Establish a new authentication session.
        Cache first, then the OAuth flow from client_secrets, then the
        application default credentials.  On success the credentials are
        saved in the cache file to reuse on subsequent invocations.
        """
        self.__creds = None
        self.__services = {}
        if not self.__scopes:
            logger.warning("no scopes requested, not connecting")
            return False
        requested_scopes = list(self.__scopes)
        self._load_cache(requested_scopes)
        if not self.connected and self.__creds and self.__creds.refresh_token:
            try:
                self.__creds.refresh(Request())
            except google.auth.exceptions.RefreshError as e:
                logger.warning("failed to refresh stored creds: %s, deleting cred cache and re-authorizing", e)
            if not self.connected:
                self.__creds = None
                self.__cache.unlink(missing_ok=True)

        if not self.connected:
            if self.__secrets.exists() and self.__secrets.is_file():
                flow = InstalledAppFlow.from_client_secrets_file(str(self.__secrets), requested_scopes)
                self.__creds = flow.run_local_server(host=self.auth_server, port=self.auth_port,
                                                     authorization_prompt_message=self.auth_prompt_msg,
                                                     success_message=self.auth_flow_success_msg)
            else:
                try:
                    self.__creds, _ = google.auth.default(scopes=requested_scopes)
                    if not self.__creds.valid:
                        self.__creds.refresh(Request())
                except (google.auth.exceptions.DefaultCredentialsError,
                        google.auth.exceptions.RefreshError) as e:
                    logger.error("no client secrets at %s and no usable default credentials: %s", self.__secrets, e)
                    self.__creds = None

            if self.connected:
                self._save_cache(requested_scopes)
        return self.connected

    def get_service(self, name: str, version: str) -> Resource|None:
        """
        Build the requested service if not already available, connecting if required.
        Can return None if no connection present.
        """
        if not self.connected:
            self.connect()
        if not self.connected:
            return None
        id = f'{name}:{version}'
        s = self.__services.get(id, None)
        if s is None:
            s = build(name, version, credentials=self.__creds,
                      developerKey=self.__developer_key, cache=self.__discovery_cache)
            if s:
                self.__services[id] = s
        return s
