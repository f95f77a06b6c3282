from flask import Flask, request, jsonify
import os, logging, tempfile
from werkzeug.utils import secure_filename

from shipping_rates import (Cart, CartItem, CatalogClient, Product, Settings, TariffSheetError,
                            YurticiCarrier, load_tariff_sheet)
from shipping_rates.config import as_bool
from shipping_rates.store import ConfigStore, SqliteCurrencyProvider
from shipping_rates.yurtici import CARRIER_CODE

# ---------- Logging ----------
logging.basicConfig(level=logging.DEBUG, format="%(asctime)s [%(levelname)s] %(message)s")
log = logging.getLogger("shipping_rates")

ALLOWED_EXTS = {"xlsx", "xls", "csv"}
def allowed_file(fn: str) -> bool:
    return "." in fn and fn.rsplit(".", 1)[1].lower() in ALLOWED_EXTS

# ---------- Cart payload ----------
def parse_cart(data) -> Cart:
    """Build a Cart from `{"items": [{"product": {...}, "quantity": n, "variant_product_id": id}]}`."""
    if not isinstance(data, dict) or not isinstance(data.get("items"), list):
        raise ValueError("payload needs an 'items' list")
    items = []
    for idx, raw in enumerate(data["items"]):
        if not isinstance(raw, dict) or not isinstance(raw.get("product"), dict):
            raise ValueError(f"item {idx}: missing 'product'")
        p = raw["product"]
        if p.get("id") is None:
            raise ValueError(f"item {idx}: product needs an 'id'")
        qty = raw.get("quantity", 1)
        if isinstance(qty, bool) or not isinstance(qty, int) or qty < 1:
            raise ValueError(f"item {idx}: quantity must be a positive integer")
        product = Product(
            id=p["id"], type=p.get("type") or "simple",
            height=p.get("height"), width=p.get("width"),
            length=p.get("length"), weight=p.get("weight"),
        )
        items.append(CartItem(product=product, quantity=qty,
                              variant_product_id=raw.get("variant_product_id")))
    return Cart(items=items)


def create_app(settings: Settings = None) -> Flask:
    settings = settings or Settings.from_env()
    os.makedirs(settings.upload_dir, exist_ok=True)

    app = Flask(__name__)
    store = ConfigStore(settings.db_path)
    store.init_db()
    catalog = CatalogClient(settings.catalog_base_url, timeout=settings.catalog_timeout,
                            verify=settings.catalog_verify_tls)
    app.config["SHIPPING_SETTINGS"] = settings
    app.config["CONFIG_STORE"] = store

    def build_carrier() -> YurticiCarrier:
        cs = store.get_carrier_settings(CARRIER_CODE)
        tariff = None
        if cs.tariff_file:
            try:
                tariff = load_tariff_sheet(cs.tariff_file)
            except TariffSheetError as e:
                log.error("Tariff sheet for %s unusable, using built-in brackets: %s", cs.code, e)
        provider = SqliteCurrencyProvider(store, settings.shop_currency)
        return YurticiCarrier(cs, catalog, provider, tariff=tariff)

    # ---------- Rates ----------
    @app.route('/api/shipping/rates', methods=['POST'])
    def api_rates():
        try:
            cart = parse_cart(request.get_json(force=True, silent=True))
        except ValueError as e:
            log.warning("Bad payload to /api/shipping/rates: %s", e)
            return jsonify({"success": False, "error": f"Invalid payload: {e}"}), 400

        quote = build_carrier().calculate(cart)
        return jsonify({"success": True, "rate": quote.to_dict() if quote else None})

    # ---------- Carrier settings ----------
    @app.route('/api/carrier', methods=['GET'])
    def api_get_carrier():
        cs = store.get_carrier_settings(CARRIER_CODE)
        return jsonify({"code": cs.code, "active": cs.active, "title": cs.title,
                        "description": cs.description,
                        "tariff_file": os.path.basename(cs.tariff_file) if cs.tariff_file else None})

    @app.route('/api/carrier', methods=['POST'])
    def api_update_carrier():
        cs = store.get_carrier_settings(CARRIER_CODE)
        if "active" in request.form:
            cs.active = as_bool(request.form.get("active"))
        for k in ("title", "description"):
            if k in request.form:
                setattr(cs, k, (request.form.get(k) or "").strip())
        store.save_carrier_settings(cs)
        return jsonify({"message": f"Carrier {cs.code} updated."})

    @app.route('/api/carrier/tariff', methods=['POST'])
    def api_upload_tariff():
        file = request.files.get('file')
        if not file or not allowed_file(file.filename):
            return jsonify({"error": "Upload a .csv, .xlsx or .xls tariff sheet"}), 400
        fname = secure_filename(file.filename)
        saved_path = os.path.join(settings.upload_dir, fname)
        # validate under a temp name so a rejected upload never replaces the active sheet
        fd, tmp_path = tempfile.mkstemp(dir=settings.upload_dir, prefix=".upload-",
                                        suffix=os.path.splitext(fname)[1])
        os.close(fd)
        file.save(tmp_path)
        try:
            table = load_tariff_sheet(tmp_path)
        except TariffSheetError as e:
            log.warning("Rejected tariff sheet %s: %s", fname, e)
            os.remove(tmp_path)
            return jsonify({"error": str(e)}), 400
        os.replace(tmp_path, saved_path)
        store.set_tariff_file(CARRIER_CODE, saved_path)
        return jsonify({"message": f"Tariff sheet {fname} loaded.",
                        "brackets": [list(b) for b in table.brackets]})

    # ---------- Exchange rates ----------
    @app.route('/api/exchange-rates', methods=['POST'])
    def api_set_exchange_rate():
        data = request.get_json(force=True, silent=True) or {}
        currency = str(data.get("currency") or "").strip().upper()
        try:
            rate = float(data.get("rate"))
        except (TypeError, ValueError):
            return jsonify({"error": "Missing or non-numeric 'rate'"}), 400
        if not currency:
            return jsonify({"error": "Missing 'currency'"}), 400
        store.set_exchange_rate(currency, rate)
        return jsonify({"message": f"Exchange rate for {currency} set."})

    return app


if __name__ == "__main__":
    app = create_app()
    log.info("Yurtici shipping rates service http://localhost:5050")
    app.run(host="0.0.0.0", port=5050, debug=True)
