import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from geonft.errors import FetchError
from geonft.fetch import feed_url
from geonft.prefix import parse_feed

log=logging.getLogger(__name__)

IPV4_BASE="https://www.ipdeny.com/ipblocks/data/aggregated"
IPV6_BASE="https://www.ipdeny.com/ipv6/ipaddresses/aggregated"


@dataclass(frozen=True)
class CountryEntry:
	code: str
	name: str
	ipv4: tuple
	ipv6: tuple

	def summary(self):
		return f"{self.name} ({self.code.upper()}) -> {len(self.ipv4)} IPv4 blocks, {len(self.ipv6)} IPv6 blocks"


def resolve_country(fetcher,code,name,ipv4_base=IPV4_BASE,ipv6_base=IPV6_BASE):
	# IPv4 is fetched and parsed before IPv6. Both must succeed for the entry to exist.
	ipv4=parse_feed(fetcher.fetch_text(feed_url(ipv4_base,code)),4)
	ipv6=parse_feed(fetcher.fetch_text(feed_url(ipv6_base,code)),6)
	return CountryEntry(code.lower(),name,tuple(ipv4),tuple(ipv6))


def resolve_countries(fetcher,countries,ipv4_base=IPV4_BASE,ipv6_base=IPV6_BASE,workers=1,keep_going=False,progress=None):
	"""Build the country directory: {code: CountryEntry} in the order of countries.

	Any FetchError aborts the whole run and nothing is returned, unless keep_going
	is set, in which case the failing country is logged and left out.
	progress is called with each CountryEntry in input order.
	"""
	directory={}

	def add(code,name,resolve):
		# Single writer: entries are only inserted here, in input order
		try:
			entry=resolve()
		except FetchError as e:
			if not keep_going:
				raise
			log.warning(f"Skipping {name} ({code.upper()}): {e}")
			return
		directory[entry.code]=entry
		if progress:
			progress(entry)

	if workers<=1:
		for code,name in countries:
			add(code,name,lambda code=code,name=name:resolve_country(fetcher,code,name,ipv4_base,ipv6_base))
		return directory

	log.debug(f"Resolving {len(countries)} countries with {workers} workers")
	executor=ThreadPoolExecutor(max_workers=workers)
	try:
		futures=[(code,name,executor.submit(resolve_country,fetcher,code,name,ipv4_base,ipv6_base)) for code,name in countries]
		for code,name,future in futures:
			add(code,name,future.result)
	except BaseException:
		# Fail fast: drop queued countries, let in-flight requests run into their timeout
		executor.shutdown(wait=False,cancel_futures=True)
		raise
	executor.shutdown()
	return directory
