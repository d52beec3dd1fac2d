"""Bundled sample point sets."""

from __future__ import annotations

from geotour.models import Point

# Landmarks around Albany village and the Massey University campus, Auckland
ALBANY_WALK: list[Point] = [
    Point("The Atrium - Massey University", -36.7331, 174.7011),
    Point("Aperture Memorial", -36.7328, 174.7006),
    Point("Massey IMS Building", -36.7338, 174.7012),
    Point("Sir Neil Water Lecture Hall", -36.7338, 174.7019),
    Point("Massey University Quadrangle Building", -36.7324, 174.7017),
    Point("Matauranga Stained Window", -36.7324, 174.7013),
    Point("Massey University Lost Sign", -36.7319, 174.7014),
    Point("Study Centre Opening Plaque", -36.7316, 174.7004),
    Point("Massey University Study Centre Courtyard", -36.7311, 174.7006),
    Point("Albany Presbyterian Church", -36.730, 174.6977),
    Point("Albany Village Cemetery", -36.7298, 174.6972),
    Point("Albany Community Playground", -36.7286, 174.6982),
    Point("Albany Community House", -36.7284, 174.6988),
    Point("King George V Coronation Hall", -36.727, 174.6971),
    Point("Albany Memorial Library", -36.7264, 174.6968),
    Point("Holy Cross Anglican Church", -36.7253, 174.6961),
    Point("Tranquil Space", -36.7253, 174.695),
    Point("\"Balance\" Bronze Sculpture", -36.7254, 174.6949),
    Point("Kell Park Tree House", -36.72525, 174.6941),
    Point("Kell Park Heritage Trail", -36.725, 174.6942),
    Point("Albany Village Community Anchor", -36.7246, 174.6944),
    Point("Lucas Landing", -36.72345, 174.6929),
    Point("Kell Park Phillips Property", -36.7242, 174.693),
    Point("Art in the Park", -36.7242, 174.6933),
    Point("Albany Orchards", -36.7248, 174.6934),
    Point("The Oldtimer - Daniel Lucas", -36.7254, 174.6933),
    Point("Kell Park Bridge Entrance", -36.7259, 174.6936),
    Point("North Harbour Stadium Sculpture", -36.7269, 174.7028),
    Point("Albany Stadium", -36.7278, 174.7023),
    Point("Don Munri Plaque", -36.7261, 174.7026),
    Point("Harbour Sports Sports House", -36.7261, 174.703),
    Point("Marist North Harbour Rugby Club", -36.7259, 174.7035),
    Point("North Harbour RC Club Race Track", -36.7258, 174.7043),
    Point("North Harbour Stadium Archway", -36.7248, 174.705),
    Point("Iron Beanstalk", -36.7229, 174.7052),
    Point("Bronze Stars", -36.7228, 174.7047),
    Point("Hooton Reserve", -36.7227, 174.7039),
    Point("Hooton Reserve Park Map", -36.722, 174.7052),
    Point("Hooton Reserve Skate Bowl", -36.7212, 174.7053),
    Point("Hooton Reserve Playground", -36.7211, 174.7056),
    Point("Kawai Purapura", -36.7211, 174.7044),
]
