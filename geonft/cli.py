import argparse
import logging
import re
import subprocess
import sys
from geonft.config import Settings,setup_logging
from geonft.errors import FetchError,WriteError
from geonft.fetch import DEFAULT_TIMEOUT,Fetcher,new_session
from geonft.groups import Group,countries_for
from geonft.render import DEFAULT_TABLE,Policy,ruleset_path,write_ruleset
from geonft.resolver import IPV4_BASE,IPV6_BASE,resolve_countries
from geonft.store import data_path,write_directory

log=logging.getLogger(__name__)

NAME=re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")


def timeout_seconds(value):
	try:
		seconds=float(value)
	except ValueError:
		raise argparse.ArgumentTypeError(f"invalid timeout: {value}")
	if not seconds>0:
		raise argparse.ArgumentTypeError(f"timeout must be greater than 0: {value}")
	return seconds


def nft_name(value):
	if not NAME.match(value):
		raise argparse.ArgumentTypeError(f"invalid nftables identifier: {value}")
	return value


def build_parser():
	parser=argparse.ArgumentParser(prog="geonft",allow_abbrev=False,description="Country-group nftables rule-set generator")
	parser.add_argument("group",choices=[g.value for g in Group],help="Country group to resolve")
	parser.add_argument("-p","--policy",choices=[p.value for p in Policy],default=Policy.BLOCK.value,help="block: drop listed networks, accept the rest. allow: accept listed networks, drop the rest. Default block.")
	parser.add_argument("-o","--output-dir",metavar="<dir>",default=".",help="Directory for the JSON map and the .nft file. Default is the current directory.")
	parser.add_argument("-t","--timeout",metavar="<seconds>",type=timeout_seconds,default=DEFAULT_TIMEOUT,help=f"Timeout for each feed request. Default {DEFAULT_TIMEOUT}.")
	parser.add_argument("-w","--workers",metavar="<n>",type=int,default=1,help="Resolve up to n countries in parallel. Default 1.")
	parser.add_argument("-k","--keep-going",action="store_true",help="Leave out countries whose feeds fail instead of aborting")
	parser.add_argument("--strict-status",action="store_true",help="Treat non-2xx HTTP responses as fetch failures")
	parser.add_argument("--insecure",action="store_true",help="Do not verify TLS certificates")
	parser.add_argument("--dedupe",action="store_true",help="Remove repeated prefixes from the rendered sets")
	parser.add_argument("--table",metavar="<name>",type=nft_name,default=DEFAULT_TABLE,help=f"nftables table name. Default {DEFAULT_TABLE}.")
	parser.add_argument("--ipv4-base",metavar="<url>",default=IPV4_BASE,help="Base URL of the aggregated IPv4 zones")
	parser.add_argument("--ipv6-base",metavar="<url>",default=IPV6_BASE,help="Base URL of the aggregated IPv6 zones")
	parser.add_argument("--apply",action="store_true",help="Offer to load the generated rule-set with nft -f")
	parser.add_argument("--nft",metavar="<path>",default="nft",help="nft binary used by --apply. Default nft.")
	parser.add_argument("-y","--yes",action="store_true",help="Do not ask for confirmation before --apply")
	parser.add_argument("-d",metavar="<level>",help="Debug level. 1-Warning, 2-Verbose (default), 3-Debug",type=int,default=2,choices=[1,2,3])
	return parser


def load_ruleset(path,nft="nft",assume_yes=False):
	# Post-render hook. Loading needs root, so the operator confirms unless -y was given.
	if not assume_yes:
		answer=input(f"Load {path} with {nft} -f now? [y/N] ")
		if answer.strip().lower() not in ("y","yes"):
			log.info("Rule-set not loaded")
			return None
	log.info(f"Attempting to load {path}")
	try:
		subprocess.run([nft,"-f",str(path)],stdout=subprocess.PIPE,stderr=subprocess.PIPE,check=True,timeout=60)
	except FileNotFoundError:
		log.error(f"{nft} not found")
		return False
	except subprocess.TimeoutExpired:
		log.error(f"{nft} -f {path} timed out")
		return False
	except OSError as e:
		log.error(f"Unable to run {nft}: {e}")
		return False
	except subprocess.CalledProcessError as e:
		log.error(f"{nft} -f {path} failed:\n{e.stderr.decode('utf-8','ignore')}")
		return False
	log.info(f"Loaded {path}")
	return True


def run(settings,session=None):
	if session is None:
		session=new_session(settings.insecure)
	fetcher=Fetcher(session,timeout=settings.timeout,strict_status=settings.strict_status)
	countries=countries_for(settings.group)
	log.info(f"Resolving {len(countries)} countries for {settings.group}")

	directory=resolve_countries(
		fetcher,
		countries,
		ipv4_base=settings.ipv4_base,
		ipv6_base=settings.ipv6_base,
		workers=settings.workers,
		keep_going=settings.keep_going,
		progress=lambda entry:print(entry.summary()),
	)

	# Resolution is complete at this point. Nothing is written on a fetch failure.
	json_path=write_directory(directory,data_path(settings.output_dir,settings.group))
	nft_path=write_ruleset(
		directory,
		settings.policy,
		ruleset_path(settings.output_dir,settings.group,settings.policy),
		table=settings.table,
		chain=settings.chain,
		dedupe=settings.dedupe,
	)
	print(f"Wrote {json_path}")
	print(f"Wrote {nft_path}")
	return json_path,nft_path


def main(argv=None):
	parser=build_parser()
	args=parser.parse_args(argv)
	settings=Settings.from_args(args)
	setup_logging(settings.debug)

	try:
		json_path,nft_path=run(settings)
	except FetchError as e:
		log.error(f"Fetch failed for {e.url}: {e.reason}")
		return 1
	except WriteError as e:
		log.error(f"Write failed for {e.path}: {e.reason}")
		return 1

	if settings.apply:
		if load_ruleset(nft_path,settings.nft,settings.assume_yes) is False:
			return 2
	return 0


if __name__=="__main__":
	sys.exit(main())
