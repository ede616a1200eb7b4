from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from LOTES.geometry import generate_run
from LOTES.models import Lot, Zone

MODEL_3D = "https://modelviewer.dev/shared-assets/models/Astronaut.glb"

ZONES = [
    {
        "slug": "loma-poniente",
        "name": "Loma Poniente",
        "zoning_type": "Residential",
        "base_price": 78000,
        "lot_size_sqm": 55,
        "camera_orbit": "45deg 65deg 2.5m",
        "description": (
            "Elevated western parcel above the main dirt road. Gentle slope with panoramic views "
            "of the valley and surrounding hills. The road curves along the southern edge "
            "providing direct access."
        ),
        "corners": [[-116.6033, 31.4882], [-116.6005, 31.488], [-116.6018, 31.4856], [-116.6033, 31.4858]],
        "images": [
            "https://images.unsplash.com/photo-1507525428034-b723cf961d3e?w=300&h=200&fit=crop",
            "https://images.unsplash.com/photo-1506905925346-21bda4d32df4?w=300&h=200&fit=crop",
            "https://images.unsplash.com/photo-1519046904884-53103b34b206?w=300&h=200&fit=crop",
        ],
    },
    {
        "slug": "bajada-sur",
        "name": "Bajada Sur",
        "zoning_type": "Residential",
        "base_price": 68000,
        "lot_size_sqm": 52,
        "camera_orbit": "0deg 75deg 2.8m",
        "description": (
            "Lower western slope following the main access road. Natural desert landscaping with "
            "native vegetation. Quiet, south-facing parcels ideal for retreat-style homes with "
            "solar exposure."
        ),
        "corners": [[-116.6033, 31.4858], [-116.6018, 31.4856], [-116.6003, 31.4824], [-116.6033, 31.4824]],
        "images": [
            "https://images.unsplash.com/photo-1433086966358-54859d0ed716?w=300&h=200&fit=crop",
            "https://images.unsplash.com/photo-1471922694854-ff1b63b20054?w=300&h=200&fit=crop",
            "https://images.unsplash.com/photo-1414609245224-afa02bfb3fda?w=300&h=200&fit=crop",
        ],
    },
    {
        "slug": "cruce-arroyo",
        "name": "Cruce del Arroyo",
        "zoning_type": "Mixed Use",
        "base_price": 85000,
        "lot_size_sqm": 58,
        "camera_orbit": "135deg 70deg 3m",
        "description": (
            "Central plateau between the road junction and the rocky ridge. Prime location at the "
            "crossroads of the main access road and the arroyo branch. Approved for residential "
            "and boutique commercial."
        ),
        "corners": [[-116.6018, 31.487], [-116.5998, 31.4866], [-116.5996, 31.4848], [-116.6012, 31.4843]],
        "images": [
            "https://images.unsplash.com/photo-1505228395891-9a51e7e86bf6?w=300&h=200&fit=crop",
            "https://images.unsplash.com/photo-1509233725247-49e657c54213?w=300&h=200&fit=crop",
            "https://images.unsplash.com/photo-1468413253725-0d5181091126?w=300&h=200&fit=crop",
        ],
    },
    {
        "slug": "mesa-norte",
        "name": "Mesa Norte",
        "zoning_type": "Residential",
        "base_price": 82000,
        "lot_size_sqm": 60,
        "camera_orbit": "225deg 60deg 2m",
        "description": (
            "Expansive flat plateau east of the rocky ridge. The most buildable terrain in the "
            "development with excellent drainage and level grade throughout. Morning sun exposure "
            "and cooling Pacific breezes."
        ),
        "corners": [[-116.5998, 31.4882], [-116.5963, 31.4882], [-116.5963, 31.4855], [-116.5998, 31.4858]],
        "images": [
            "https://images.unsplash.com/photo-1510414842594-a61c69b5ae57?w=300&h=200&fit=crop",
            "https://images.unsplash.com/photo-1504681869696-d977211a5f4c?w=300&h=200&fit=crop",
            "https://images.unsplash.com/photo-1501785888041-af3ef285b470?w=300&h=200&fit=crop",
        ],
    },
    {
        "slug": "valle-central",
        "name": "Valle Central",
        "zoning_type": "Commercial",
        "base_price": 75000,
        "lot_size_sqm": 50,
        "camera_orbit": "180deg 65deg 3m",
        "description": (
            "South-central valley floor between the road junction and the seasonal wash. Direct "
            "road access on two sides. Zoned for small commercial, ideal for shops, eco-tourism, "
            "or community services."
        ),
        "corners": [[-116.6012, 31.4843], [-116.5996, 31.4848], [-116.5972, 31.4824], [-116.6003, 31.4824]],
        "images": [
            "https://images.unsplash.com/photo-1505142468610-359e7d316be0?w=300&h=200&fit=crop",
            "https://images.unsplash.com/photo-1520483601560-389dff434fdf?w=300&h=200&fit=crop",
            "https://images.unsplash.com/photo-1494783367193-149034c05e8f?w=300&h=200&fit=crop",
        ],
    },
    {
        "slug": "ribera-este",
        "name": "Ribera Este",
        "zoning_type": "Residential",
        "base_price": 72000,
        "lot_size_sqm": 55,
        "camera_orbit": "315deg 55deg 3.5m",
        "description": (
            "Eastern bank beyond the seasonal arroyo wash. Open desert terrain with unobstructed "
            "southern views. Generous lot sizes and natural separation from the rest of the "
            "development create a private, exclusive feel."
        ),
        "corners": [[-116.5996, 31.4855], [-116.5963, 31.4855], [-116.5963, 31.4824], [-116.5972, 31.4824]],
        "images": [
            "https://images.unsplash.com/photo-1476514525535-07fb3b4ae5f1?w=300&h=200&fit=crop",
            "https://images.unsplash.com/photo-1500382017468-9049fed747ef?w=300&h=200&fit=crop",
            "https://images.unsplash.com/photo-1437719417032-8799fd04b926?w=300&h=200&fit=crop",
        ],
    },
]


class Command(BaseCommand):
    help = 'Crea las zonas de Santo Tomás Nuevo y genera la cuadrícula de lotes de cada una'

    def add_arguments(self, parser):
        parser.add_argument("--cols", type=int, default=5)
        parser.add_argument("--rows", type=int, default=4)
        parser.add_argument("--reset", action="store_true", help="Borra lotes y zonas existentes antes de sembrar")

    def handle(self, *args, **options):
        cols, rows = options["cols"], options["rows"]

        if Zone.objects.exists() and not options["reset"]:
            raise CommandError("Ya existen zonas; usa --reset para volver a sembrar.")

        with transaction.atomic():
            if options["reset"]:
                Lot.objects.all().delete()
                Zone.objects.all().delete()

            zones = []
            for data in ZONES:
                zone = Zone(model_3d_url=MODEL_3D, **data)
                zone.base_price = Decimal(data["base_price"])
                zone.lot_size_sqm = Decimal(data["lot_size_sqm"])
                zone.full_clean()
                zone.save()
                zones.append(zone)

            by_slug = {zone.slug: zone for zone in zones}
            generated = generate_run(zones, cols, rows)
            Lot.objects.bulk_create(
                [Lot(zone=by_slug[g.zone_slug], **g.as_model_kwargs()) for g in generated],
                batch_size=50,
            )

        counts = {code: Lot.objects.filter(status=code).count() for code, _ in Lot.STATUS_CHOICES}
        self.stdout.write(self.style.SUCCESS(
            f"Zonas: {len(zones)}  Lotes: {len(generated)} "
            f"({counts['AVAILABLE']} disponibles, {counts['RESERVED']} reservados, {counts['SOLD']} vendidos)"
        ))
