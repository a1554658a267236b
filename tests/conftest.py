import pytest
import requests

IPV4_BASE="http://feeds.test/v4"
IPV6_BASE="http://feeds.test/v6"


def make_response(url,body,status=200,encoding="utf-8"):
	r=requests.Response()
	r.url=url
	r.status_code=status
	r._content=body if isinstance(body,bytes) else body.encode("utf-8")
	r.encoding=encoding
	return r


class FakeSession:
	# Stands in for requests.Session. routes maps URL -> body text, bytes, (body,status) or an exception.
	def __init__(self,routes):
		self.routes=routes
		self.calls=[]

	def get(self,url,timeout=None):
		self.calls.append((url,timeout))
		route=self.routes.get(url)
		if route is None:
			raise requests.ConnectionError(f"no route to {url}")
		if isinstance(route,Exception):
			raise route
		if isinstance(route,tuple):
			return make_response(url,route[0],status=route[1])
		return make_response(url,route)


@pytest.fixture
def testland_routes():
	return {
		f"{IPV4_BASE}/xx-aggregated.zone":"10.0.0.0/8\n\n192.168.1.0/24\nnot-a-cidr\n",
		f"{IPV6_BASE}/xx-aggregated.zone":"2001:db8::/32\n",
	}
