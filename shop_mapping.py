# shop_mapping.py
# ✅ Single source of truth: store names exactly as stored in visits.store
STORE_OPTIONS = ("臨安店", "南科店")

# Dashboard filter sentinel: "no store filter"
ALL_STORES = "全部"
STORE_FILTER_OPTIONS = (ALL_STORES,) + STORE_OPTIONS
