import logging
import requests
import urllib3
from geonft import __version__
from geonft.errors import FetchError

log=logging.getLogger(__name__)

DEFAULT_TIMEOUT=30


def feed_url(base,code):
	# <base>/<cc>-aggregated.zone, country code always lowercase
	return f"{base.rstrip('/')}/{code.lower()}-aggregated.zone"


def new_session(insecure=False):
	# All requests share one session. This keeps the connection to the feed host alive between countries.
	session=requests.Session()
	session.headers.update({"User-Agent":f"geonft/{__version__}"})
	if insecure:
		# Disable certificate verification and the warning urllib3 emits for every request
		urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
		session.verify=False
	return session


class Fetcher:
	# Retrieves one feed body per call. No retries and no caching: every call is a fresh GET.
	def __init__(self,session,timeout=DEFAULT_TIMEOUT,strict_status=False):
		self.session=session
		self.timeout=timeout
		self.strict_status=strict_status

	def fetch_text(self,url):
		log.debug(f"Attempting to fetch {url}")
		try:
			r=self.session.get(url,timeout=self.timeout)
			if self.strict_status:
				r.raise_for_status()
		except requests.RequestException as e:
			raise FetchError(url,e) from e
		# A non-success status with a readable body is returned as is unless strict_status is set
		if not r.ok:
			log.debug(f"{url} returned HTTP {r.status_code}")
		try:
			text=r.content.decode(r.encoding or "utf-8")
		except (UnicodeDecodeError,LookupError) as e:
			raise FetchError(url,f"undecodable body ({e})") from e
		log.debug(f"Received {len(r.content)} bytes from {url}")
		return text
