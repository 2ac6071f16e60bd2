"""Sample directory data loaded into a fresh store.

Five Italian cities, three places and two reviews of La Pergola.  Order
matters: ids are assigned in sequence, so the places reference cities
1 (Roma), 3 (Venezia) and 4 (Firenze), and both reviews point at place 1.
"""

from __future__ import annotations

from src.models.directory import Category, NewCity, NewPlace, NewReview

_UNSPLASH = "https://images.unsplash.com/{photo}?ixlib=rb-4.0.3&auto=format&fit=crop&w={width}&q=80"


def _image(photo: str, width: int = 1374) -> str:
    return _UNSPLASH.format(photo=photo, width=width)


SEED_CITIES: tuple[NewCity, ...] = (
    NewCity(
        name="Roma",
        country="Italia",
        description="La città eterna con monumenti storici, arte e cultura millenaria.",
        image_url=_image("photo-1552832230-c0197dd311b5"),
        is_featured=True,
    ),
    NewCity(
        name="Milano",
        country="Italia",
        description="Capitale della moda e del design con un ricco patrimonio culturale.",
        image_url=_image("photo-1512199541845-bffa11600ecf"),
        is_featured=True,
    ),
    NewCity(
        name="Venezia",
        country="Italia",
        description="La città dei canali, famosa per la sua bellezza ed architettura unica.",
        image_url=_image("photo-1516574187841-cb9cc2ca948b"),
        is_featured=True,
    ),
    NewCity(
        name="Firenze",
        country="Italia",
        description="Culla del Rinascimento, con musei, arte e architettura straordinari.",
        image_url=_image("photo-1595815771614-ade501d22bf4"),
        is_featured=True,
    ),
    NewCity(
        name="Napoli",
        country="Italia",
        description="Città dal carattere vivace, famosa per la pizza e il ricco patrimonio storico.",
        image_url=_image("photo-1534308983496-4fabb1a015ee"),
        is_featured=True,
    ),
)

SEED_PLACES: tuple[NewPlace, ...] = (
    NewPlace(
        name="Ristorante La Pergola",
        description=(
            "La Pergola è un ristorante stellato situato all'ultimo piano dell'Hotel Rome "
            "Cavalieri, con una vista mozzafiato sulla Città Eterna. Sotto la guida "
            "dell'Executive Chef Heinz Beck, il ristorante ha ottenuto tre stelle Michelin "
            "ed è considerato uno dei migliori d'Italia."
        ),
        address="Via Alberto Cadlolo, 101, 00136 Roma RM",
        city_id=1,
        category=Category.RISTORANTI,
        rating=48,
        review_count=458,
        price_level="$$$",
        contact_phone="+39 06 3509 2152",
        contact_email="info@ristorantelapergola.it",
        opening_hours="Mar-Sab: 19:30-23:00, Domenica e Lunedì: Chiuso",
        tags=["Fine Dining", "Vista Panoramica"],
        images=[
            _image("photo-1555396273-367ea4eb4db5"),
            _image("photo-1552566626-52f8b828add9", 1470),
            _image("photo-1592861956120-e524fc739696", 1470),
            _image("photo-1414235077428-338989a2e8c0", 1470),
            _image("photo-1579027989536-b7b1f875659b", 1470),
        ],
        is_featured=True,
        latitude="41.9187",
        longitude="12.4479",
    ),
    NewPlace(
        name="Galleria degli Uffizi",
        description=(
            "La Galleria degli Uffizi è uno dei musei più importanti del mondo, che ospita "
            "una collezione di opere inestimabili, in particolare del periodo del "
            "Rinascimento italiano."
        ),
        address="Piazzale degli Uffizi, 6, 50122 Firenze FI",
        city_id=4,
        category=Category.MUSEI,
        rating=47,
        review_count=325,
        price_level="$$",
        contact_phone="+39 055 294883",
        contact_email="info@uffizi.it",
        opening_hours="Mar-Dom: 08:15-18:50, Lunedì: Chiuso",
        tags=["Arte", "Rinascimento"],
        images=[_image("photo-1582719478250-c89cae4dc85b")],
        is_featured=True,
        latitude="43.7677",
        longitude="11.2553",
    ),
    NewPlace(
        name="Belmond Hotel Cipriani",
        description=(
            "Il Belmond Hotel Cipriani è uno degli hotel più lussuosi di Venezia, situato "
            "sull'isola della Giudecca con una vista mozzafiato sulla laguna e su Piazza "
            "San Marco."
        ),
        address="Giudecca 10, 30133 Venezia VE",
        city_id=3,
        category=Category.HOTEL,
        rating=49,
        review_count=187,
        price_level="$$$$",
        contact_phone="+39 041 240801",
        contact_email="info.cip@belmond.com",
        opening_hours="Aperto 24/7",
        tags=["Lusso", "Vista Laguna"],
        images=[_image("photo-1551632436-cbf8dd35adfa")],
        is_featured=True,
        latitude="45.4254",
        longitude="12.3462",
    ),
)

SEED_REVIEWS: tuple[NewReview, ...] = (
    NewReview(
        place_id=1,
        user_name="Marco Rossi",
        rating=5,
        comment=(
            "Un'esperienza culinaria straordinaria! Ogni piatto è una vera opera d'arte, "
            "con sapori incredibilmente bilanciati. Il servizio è impeccabile e la vista su "
            "Roma al tramonto è semplicemente magica. Certamente non economico, ma vale "
            "ogni euro per un'occasione speciale."
        ),
    ),
    NewReview(
        place_id=1,
        user_name="Laura Bianchi",
        rating=4,
        comment=(
            "Il cibo è squisito e la presentazione è impressionante. Ho tolto una stella "
            "solo per il tempo di attesa tra le portate, un po' troppo lungo. Il sommelier "
            "è molto competente e ci ha consigliato un vino perfetto. L'ambiente è elegante "
            "senza essere troppo formale."
        ),
    ),
)
