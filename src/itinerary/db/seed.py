"""Starter itinerary inserted into an empty locations table."""

from itinerary.models import LocationCreate

_STARTER_ROWS: list[tuple[str, float, float, str, str, str]] = [
    # Day 1: North Coast
    ("Cala Formentor", 39.9597, 3.2097, "day1", "7:00 AM", "Pristine golden beach, must arrive before 10 AM road closure"),
    ("Medieval Alcúdia", 39.8499, 3.1214, "day1", "11:00 AM", "Roman ruins, perfectly preserved 13th-century walls"),
    ("Playa de Alcúdia", 39.8389, 3.1281, "day1", "2:00 PM", "3.5km family-friendly beach, shallow calm waters"),
    ("Pollença", 39.8708, 3.0208, "day1", "6:00 PM", "Climb 365 Calvary Steps for sunset views. Dinner at Stay Restaurant"),
    # Day 2: UNESCO Mountain Villages
    ("Valldemossa", 39.7097, 2.6225, "day2", "8:00 AM", "Chopin's former home, honey-stone village charm"),
    ("Deià", 39.7481, 2.6486, "day2", "10:30 AM", "Artist colony, Robert Graves museum, ochre houses"),
    ("Cala Deià", 39.7417, 2.6444, "day2", "11:30 AM", "Hidden pebble cove via hiking trail"),
    ("Sóller", 39.7650, 2.7142, "day2", "2:00 PM", "Golden valley town, Moorish gardens, Gaudí-influenced church"),
    ("Port de Sóller", 39.7961, 2.6900, "day2", "5:30 PM", "Horseshoe bay, evening swimming. Dinner at Béns d'Avall or Es Blai"),
    # Day 3: Wine Country & Villages
    ("Binissalem", 39.6875, 2.8497, "day3", "9:00 AM", "José Luis Ferrer winery tour, indigenous grapes"),
    ("Macià Batle Winery", 39.6933, 2.8619, "day3", "11:00 AM", "Traditional family winery since 1856"),
    ("Sineu", 39.6431, 3.0197, "day3", "2:30 PM", "Authentic market town, Wednesday livestock market"),
    ("Vins Miquel Gelabert", 39.6106, 3.1319, "day3", "4:00 PM", "Artisan 'Madman of Manacor' wines"),
    ("Son Fornés", 39.6339, 3.0306, "day3", "6:30 PM", "Bronze Age archaeological site. Dinner in Montuïri at S'Hostal"),
    # Day 4: Southeast Paradise
    ("Cala Mondragó", 39.3417, 3.1856, "day4", "7:30 AM", "Protected natural park, pristine beaches"),
    ("Cala des Moro", 39.3275, 3.1781, "day4", "10:30 AM", "Instagram-famous tiny turquoise cove"),
    ("Cala Llombards", 39.3247, 3.1647, "day4", "2:00 PM", "Sheltered cove with fishing huts"),
    ("Es Trenc", 39.3500, 2.9667, "day4", "4:00 PM", "7km 'Caribbean-style' white sand (expect crowds)"),
    ("Santuari de Sant Blai", 39.3631, 3.0347, "day4", "5:30 PM", "Hilltop monastery, panoramic sunset views"),
    ("Porto Colom", 39.4175, 3.2656, "day4", "Dinner", "Sa Llotja harbor views, fresh daily catch"),
    # Day 5: West Coast Finale
    ("Sant Elm", 39.5803, 2.3531, "day5", "8:30 AM", "Westernmost beach, Sa Dragonera island views"),
    ("Sa Dragonera", 39.5850, 2.3167, "day5", "10:30 AM", "Uninhabited nature reserve island boat trip"),
    ("Sa Trapa", 39.5719, 2.3619, "day5", "2:30 PM", "Clifftop monastery ruins hike, dramatic views"),
    ("Andratx", 39.5433, 2.3833, "day5", "4:00 PM", "Authentic market town, contemporary art center"),
    ("Estellencs", 39.6519, 2.5003, "day5", "5:30 PM", "MA-10 UNESCO coastal route"),
    ("Banyalbufar", 39.6792, 2.5167, "day5", "Evening", "MA-10 route, sunset dinner at Es Grau with Mediterranean views"),
]

STARTER_ITINERARY: list[LocationCreate] = [
    LocationCreate(name=name, lat=lat, lng=lng, day=day, time=time, description=description)
    for name, lat, lng, day, time, description in _STARTER_ROWS
]
