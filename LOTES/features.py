"""GeoJSON projections of zones and lots for the map renderer."""
from decimal import Decimal


def format_price(value):
    return f"${Decimal(value):,.0f} USD"


def format_number(value):
    return f"{Decimal(value).normalize():f}"


def format_size(value):
    return f"{format_number(value)} m²"


def feature_collection(features):
    return {"type": "FeatureCollection", "features": list(features)}


def zone_center(zone):
    """Mean of the four corners, used for labels and fly-to targets."""
    corners = zone.corners
    return [
        sum(c[0] for c in corners) / len(corners),
        sum(c[1] for c in corners) / len(corners),
    ]


def lot_feature(lot):
    zone = lot.zone
    return {
        "type": "Feature",
        "id": lot.feature_id,
        "properties": {
            "id": lot.code,
            "zoneId": zone.slug,
            "zoneName": zone.name,
            "label": lot.label,
            "status": lot.status.lower(),
            "price": format_price(lot.price),
            "size": format_size(lot.size_sqm),
            "zoning": zone.zoning_type,
        },
        "geometry": {"type": "Polygon", "coordinates": [lot.polygon]},
    }


def lots_to_features(lots):
    return feature_collection(lot_feature(lot) for lot in lots)


def zones_to_features(zones):
    return feature_collection(
        {
            "type": "Feature",
            "properties": {"id": zone.slug, "name": zone.name},
            "geometry": {
                "type": "Polygon",
                "coordinates": [list(zone.corners) + [zone.corners[0]]],
            },
        }
        for zone in zones
    )


def zone_label_points(zones):
    return feature_collection(
        {
            "type": "Feature",
            "properties": {"name": zone.name},
            "geometry": {"type": "Point", "coordinates": zone_center(zone)},
        }
        for zone in zones
    )


def lot_label_points(lots):
    return feature_collection(
        {
            "type": "Feature",
            "properties": {"label": lot.label},
            "geometry": {"type": "Point", "coordinates": list(lot.center)},
        }
        for lot in lots
    )


class FeatureIndex:
    """Join between renderer feature ids and domain lots/zones.

    Built from a snapshot of the collections; rebuild it after any write so
    the map reflects persisted state.
    """

    def __init__(self, lots, zones=()):
        lots = list(lots)
        self._lots = {lot.feature_id: lot for lot in lots}
        self._by_code = {lot.code: lot for lot in lots}
        self._zones = {zone.slug: zone for zone in zones}

    def __len__(self):
        return len(self._lots)

    def lot_for(self, feature_id):
        if feature_id is None:
            return None
        try:
            return self._lots.get(int(feature_id))
        except (TypeError, ValueError):
            return None

    def lot_by_code(self, code):
        if not isinstance(code, str):
            return None
        return self._by_code.get(code)

    def lot_code_for(self, feature_id):
        lot = self.lot_for(feature_id)
        return lot.code if lot else None

    def zone_for(self, slug):
        if not isinstance(slug, str):
            return None
        return self._zones.get(slug)

    def feature_ids(self):
        return list(self._lots)

    def to_geojson(self):
        lots = list(self._lots.values())
        zones = list(self._zones.values())
        return {
            "sublots": lots_to_features(lots),
            "zones": zones_to_features(zones),
            "zone_labels": zone_label_points(zones),
            "sublot_labels": lot_label_points(lots),
        }
