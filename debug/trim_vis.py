import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))


import polyfence
from shapely.geometry import Polygon

from plot_features import plot_admission

store = polyfence.FeatureStore()
store.add(polyfence.create_feature(Polygon([(0, 0), (1, 0), (1, 1), (0, 1)]), 'polygon'))
store.add(polyfence.create_feature(polyfence.create_rectangle((1.2, 0), (2, 2)), 'rectangle'))

candidate = polyfence.create_feature(polyfence.create_rectangle((0.5, 0.5), (1.5, 1.5)), 'rectangle')
result = store.add(candidate)
print(f"Trimmed against: {result.trimmed_against}, area: {result.feature.area:.3f}")
plot_admission(candidate, store.features, result, title="Rectangle trimmed by two shapes")
