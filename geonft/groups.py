from enum import Enum

# Bump when any membership table below changes
TABLES_VERSION="2024.1"


class Group(Enum):
	BRICS="brics"
	G7="g7"
	FIVE_EYES="five_eyes"
	EU="eu"
	ASEAN="asean"

	def __str__(self):
		return self.value


# Declaration order is the processing and output order
COUNTRY_GROUPS={
	Group.BRICS:(
		("br","Brazil"),
		("ru","Russia"),
		("in","India"),
		("cn","China"),
		("za","South Africa"),
	),
	Group.G7:(
		("ca","Canada"),
		("fr","France"),
		("de","Germany"),
		("it","Italy"),
		("jp","Japan"),
		("gb","United Kingdom"),
		("us","United States"),
	),
	Group.FIVE_EYES:(
		("au","Australia"),
		("ca","Canada"),
		("nz","New Zealand"),
		("gb","United Kingdom"),
		("us","United States"),
	),
	Group.EU:(
		("at","Austria"),
		("be","Belgium"),
		("bg","Bulgaria"),
		("hr","Croatia"),
		("cy","Cyprus"),
		("cz","Czechia"),
		("dk","Denmark"),
		("ee","Estonia"),
		("fi","Finland"),
		("fr","France"),
		("de","Germany"),
		("gr","Greece"),
		("hu","Hungary"),
		("ie","Ireland"),
		("it","Italy"),
		("lv","Latvia"),
		("lt","Lithuania"),
		("lu","Luxembourg"),
		("mt","Malta"),
		("nl","Netherlands"),
		("pl","Poland"),
		("pt","Portugal"),
		("ro","Romania"),
		("sk","Slovakia"),
		("si","Slovenia"),
		("es","Spain"),
		("se","Sweden"),
	),
	Group.ASEAN:(
		("bn","Brunei"),
		("kh","Cambodia"),
		("id","Indonesia"),
		("la","Laos"),
		("my","Malaysia"),
		("mm","Myanmar"),
		("ph","Philippines"),
		("sg","Singapore"),
		("th","Thailand"),
		("vn","Vietnam"),
	),
}


def countries_for(group):
	return COUNTRY_GROUPS[Group(group)]
