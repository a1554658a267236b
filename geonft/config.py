import http.client as http_client
import logging
from dataclasses import dataclass
from pathlib import Path
from geonft.fetch import DEFAULT_TIMEOUT
from geonft.groups import Group
from geonft.render import DEFAULT_CHAIN,DEFAULT_TABLE,Policy
from geonft.resolver import IPV4_BASE,IPV6_BASE

LOG_FORMAT='%(asctime)s - %(levelname)s - %(message)s'
# -d 1|2|3
LOG_LEVELS=[logging.WARNING,logging.INFO,logging.DEBUG]


@dataclass(frozen=True)
class Settings:
	group: Group
	policy: Policy=Policy.BLOCK
	ipv4_base: str=IPV4_BASE
	ipv6_base: str=IPV6_BASE
	timeout: float=DEFAULT_TIMEOUT
	output_dir: Path=Path(".")
	workers: int=1
	keep_going: bool=False
	strict_status: bool=False
	insecure: bool=False
	dedupe: bool=False
	table: str=DEFAULT_TABLE
	chain: str=DEFAULT_CHAIN
	apply: bool=False
	nft: str="nft"
	assume_yes: bool=False
	debug: int=2

	@classmethod
	def from_args(cls,args):
		return cls(
			group=Group(args.group),
			policy=Policy(args.policy),
			ipv4_base=args.ipv4_base,
			ipv6_base=args.ipv6_base,
			timeout=args.timeout,
			output_dir=Path(args.output_dir),
			workers=max(1,args.workers),
			keep_going=args.keep_going,
			strict_status=args.strict_status,
			insecure=args.insecure,
			dedupe=args.dedupe,
			table=args.table,
			apply=args.apply,
			nft=args.nft,
			assume_yes=args.yes,
			debug=args.d,
		)


def setup_logging(debug):
	level=LOG_LEVELS[debug-1]
	logging.basicConfig(format=LOG_FORMAT,level=level)
	if debug==3:
		# Print request and response lines as they go over the wire
		http_client.HTTPConnection.debuglevel=1
	requests_log=logging.getLogger("urllib3")
	requests_log.setLevel(level)
	requests_log.propagate=True
	return level
