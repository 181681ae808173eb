"""Known roads, chemicals and wind directions for the spray district."""

WIND_DIRECTIONS = [
    "North",
    "North East",
    "East",
    "South East",
    "South",
    "South West",
    "West",
    "North West",
]

ALL_ROADS = sorted([
    "5th", "6221 Mile", "Abby", "Alden", "Andee K", "Antelope", "Arimo", "Arkansas", "Armstrong",
    "Aslett", "Aubrey", "Autumn", "Baldy Mountain", "Ballard", "Barton", "Bates", "Batiste",
    "Beehive", "Benson", "Berkshire", "Bighorn", "Billy", "Black Pine", "Blackrock",
    "Blackrock Canyon", "Blaser", "Bob Smith Canyon", "Bonneville", "Bowman", "Braxton",
    "Brighton", "Broxon", "Buckskin", "Buffalo", "Burton", "Byington", "Cambridge", "Capell",
    "Caribou", "Carla", "Carriage Country", "Castle Creek", "Cemetery", "Charlotte",
    "Chatterton", "Chestnut Hill", "Chisholm", "Cimmeron", "Cinnamon Ridge", "Coffin",
    "Connell", "Corey", "Corwin", "County", "Coyote", "Crawford Ranch", "Creekside",
    "Crestview", "Crystal Springs", "Cumberland", "Curtis", "Cutshalts", "Deadwood", "De Kay",
    "Deer Reserve", "Deerridge", "Degn", "Dempsey Creek", "Devonshire", "Dixon", "Drew",
    "Dry Canyon", "Eagle Rock", "Edmo", "Egan", "Elaine", "Elk", "Ellis", "Ellsworth",
    "Ethan", "Evening View", "Facer Mountain View", "Fairgrounds", "Farr", "Fergeson",
    "Fish Creek", "Ford", "Fork Mink Creek", "Fort Hall Mine", "Fort Hall Mine Site B",
    "Frandsen", "Frasure", "Futurity", "Gails", "Gale Mountain", "Garden Creek", "Gibson Jack",
    "Girard", "Gittens", "Glass", "Glover", "Go Way", "Goodenough", "Green", "Green Canyon",
    "Grey Fox", "Gun Range", "Hadley Canyon", "Hagler", "Hall", "Hamilton", "Hannah",
    "Harkness Canyon", "Harrington", "Hawkins", "Hawkins South Fork", "Hawthorne",
    "Haystack Mountain", "Heather", "Heather Glen", "Henderson", "Hermitsville", "Highway 30",
    "Hildreth", "Hog Hollow", "Honeysuckle", "Hoot Owl", "Huckleberry", "IFFT", "Indian Creek",
    "Inkom", "Inman", "Irel", "Jackson Creek", "Jana", "Jaxon", "Jenkins", "Jensen", "Karen",
    "Katie Mountain", "Kensington", "Kissel", "Kraft", "Lacey", "Laramie", "Laughran", "Lee",
    "Leta", "Lily", "Limelight", "Lish", "Lodge", "Lovell", "Lower Rock Creek", "Luna",
    "Lunar", "Madlee", "Manning", "Maple Grove", "Marble", "Marsh Creek", "Marsh Valley",
    "Maughan", "Maysi", "McCammon Landfill", "McCormack", "McDaniels", "McKee", "McNabb",
    "Meadowbrook Ranch", "Meadows", "Meadowview", "Merrick", "Merrill", "Mink Creek",
    "Mission", "Mogul", "Moonbeam", "Moonglow", "Moonlight Mine", "Moose", "Moose Creek",
    "Morgan", "Mornington", "Mountain Meadows", "My", "Nelson", "Neptune", "Nestor", "Neva",
    "Newbold", "Newt", "Nottingham", "Old Canyon", "Old Highway 91", "Old Oregon",
    "Old Skyline", "Olson", "Paintbrush", "Pamela", "Parks", "Patton", "Pebble", "Peerless",
    "Pepper Grass", "Pheasant", "Philbin", "Pidcock", "Pilot Spring", "Plain View",
    "Pocatello Creek", "Poleline", "Portneuf", "Potters", "Preakness", "Preslar", "Preston",
    "Price", "Promise", "Prospector Hollow", "Quigley", "Rapid Creek", "Rattlesnake", "Ray",
    "Raymond", "Reservation", "Rex", "Richards", "Ridge Valley", "Rio Vista", "Robbers Roost",
    "Robin", "Saddle Mountain", "Sage Hollow", "Saturn", "Sheep Creek", "Sheriff Range",
    "Shrives", "Siler", "Silver Sage", "Siphon", "Ski View", "Smith", "Smith Canyon",
    "Snowberry", "Sorenson", "Sorrelle", "Spring", "Stagecoach Stop", "Stephanie", "Stinger",
    "Stone River", "Sublette", "Summers", "Sunnyside", "Swanson", "Symons", "Tascile",
    "Tatonka", "Terese", "Terrell", "Thacker", "Thompson", "Tillotson", "Timberline", "Tool",
    "Topaz", "Touch", "Trail Creek", "Triple Crown", "Tripp", "Two Mile", "Tyhee",
    "Upper Rock Creek", "Utah", "Vandyke", "Venus", "Violet", "Virginia", "Walker Creek",
    "Wallin", "Walton", "Washington", "Webb Canyon", "Wellington", "West", "Whispering Cliffs",
    "Whispering Pines", "White Cloud", "Whittney", "Whitworth", "Wild Horse Ridge", "Winning",
    "Wiregrass Res", "Yarrow", "Yellow Dog", "Yoxall"
])

ALL_CHEMICALS = sorted([
    "Alligare 2 4-D LV6 2.5 gal County", "Alligare 90 Surfactant 1 gal", "Alligare Laramie Ib", "Anti Foam-no charge out qt.",
    "Aqua-Neat 2.5 gal", "Bivert gallon", "Broad Range 2.5 gal", "Bronc Max 2.5 gal", "Bronc Max qt.",
    "C20 Soil Ammendment", "Canter 27 oz", "Canter 27 oz.", "Chlorsulfuron 20 oz", "Climb gal", "Climb qt",
    "Confront 1 gal", "Crew 50lb bg", "Crosshair 2.5 gal", "Cynder Water Cond 2.5 gal", "Cynder Water Cond gal",
    "Defendor gal", "Defendor Herbicide qt", "Denali-ea 2.5 gal", "Detail Herbicide gal", "Detonate 2.5 gal",
    "Dicamba HD 2.5 gal", "Dimension $1/2$ gallon", "Dimension gal", "Diuron 80 DF 2.5 gallon", "Duracor gallon",
    "Edict 2SC qt", "Efficax 2.5 gal", "Escort 16 oz", "Escort 8 oz", "Esplanade 2.5 gal", "Esplanade qt",
    "Fecuse Turf 4way seed lb.", "Fluroxypyr gal", "Foundation Turf", "Frequency gal", "Garlon 4 Ultra 2.5 gal",
    "Grazonnext HL 2 gal", "Hi-Dep $1/2$ gal", "Hi-Light Dye Blue Qt.", "Hidep 2.5 gal", "Highnoon 1 gal",
    "Highnoon 2.5 gal", "Infuse 2.5 gal", "Inplace 2.5 gallon", "Krovar I DF 6 lb bag", "Liberate Lecitech 2.5 Gal",
    "LV6 Base Camp 2.5 gal", "LV6 Ester Weedone 2.5 gal", "MEC Amine-D", "Method 2.5 gal", "Milestone 2.5 Gal",
    "Milestone QT", "Opensight 1.25 lb", "Oust XP 4 lb", "Overdrive 7.5# container", "P1 Primera Triplet",
    "Panoramic qt", "Payload Ib", "Perspective 20 oz bottles", "Perspective lb", "Phase 1 gal", "Phase 2.5 gal",
    "Piper 60 oz bottles", "Piper EZ 2.5 gal", "PlainView Herbicide 2.5 gal", "Plateau 1 gal", "Platoon 2.5 gal",
    "Portfolio 4F 2.5 gal", "Portfolio 4F pint", "Prozap ZN Ib.", "Q4 Plus Turf Gal.", "Q4 Plus Turf Qt.",
    "R-11 1 gal", "Rainier 2.5 gal", "Rainier-EA qt", "Renegade 2.5 gal", "Rifle D 2.5 gal", "Rodeo 2.5 gal",
    "Round up Pro Conc 2.5 gal", "Roundup Quick Pro Box", "Roundup Quikpro 6.8 lb", "Scorch 2.5 gal",
    "SSC-11 Cleaner gal", "Speed Zone 2.5 gal", "Speed Zone 20 oz bottles", "SpeedPro XT 1 gal", "Streamline Ib",
    "Superspread MSO 2.5 gal", "Syltac 2.5 gal", "Syltac Qt", "Syltac gal", "Telar XP 16oz", "Telar XP 8oz",
    "Tordon 22K 2.5 gal", "Trimec 992 2.5 gal", "Trimec 992 qt", "Vista 2.5 gal", "xAlligare 2 4D LV6 2.5 gal",
    "xFluroxypyr gal", "xRoundup Quikpro Ib"
])


def filter_catalog(items: list[str], prefix: str | None) -> list[str]:
    """Return catalog entries starting with prefix (case-insensitive).

    An empty or missing prefix returns the full list.
    """
    if not prefix:
        return list(items)
    needle = prefix.lower()
    return [item for item in items if item.lower().startswith(needle)]


def search_roads(prefix: str | None) -> list[str]:
    return filter_catalog(ALL_ROADS, prefix)


def search_chemicals(prefix: str | None) -> list[str]:
    return filter_catalog(ALL_CHEMICALS, prefix)
