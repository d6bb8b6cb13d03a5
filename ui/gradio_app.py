# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-28
# Updated: 2026-02-14
# Description: gradio_app.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Optional, Tuple

import gradio as gr
import pandas as pd
import requests

from utility.logging_utils import log_file_path, tail_log_lines

# Environment configuration
API_BASE_URL = os.getenv("SHOP_API_BASE_URL", "http://127.0.0.1:8000").rstrip("/")
LOG_TAIL_LINES = int(os.getenv("SHOP_UI_LOG_TAIL_LINES", "400"))
TIMEOUT_SECONDS = int(os.getenv("SHOP_UI_TIMEOUT_SECONDS", "60"))
UI_SESSION_ID = "gradio-ui"

PRODUCT_COLUMNS = ["name", "sku", "price", "quantity", "category", "brand", "relevance_score"]


# Small URL helpers
def _url(path: str) -> str:
    return f"{API_BASE_URL}{path}"


def _get(path: str, params: Optional[dict] = None) -> Dict[str, Any]:
    try:
        r = requests.get(_url(path), params=params, timeout=TIMEOUT_SECONDS)
        if not r.ok:
            return {"error": f"HTTP {r.status_code}: {r.text}"}
        return r.json()
    except requests.exceptions.RequestException as e:
        return {"error": f"API request failed: {e}"}


def _post(path: str, payload: Dict[str, Any], params: Optional[dict] = None) -> Dict[str, Any]:
    try:
        r = requests.post(_url(path), json=payload, params=params, timeout=TIMEOUT_SECONDS)
        if not r.ok:
            return {"error": f"HTTP {r.status_code}: {r.text}"}
        return r.json()
    except requests.exceptions.RequestException as e:
        return {"error": f"RequestException: {e}"}


def _delete(path: str, params: Optional[dict] = None) -> Dict[str, Any]:
    try:
        r = requests.delete(_url(path), params=params, timeout=TIMEOUT_SECONDS)
        if not r.ok:
            return {"error": f"HTTP {r.status_code}: {r.text}"}
        return r.json()
    except requests.exceptions.RequestException as e:
        return {"error": f"API request failed: {e}"}


def _pretty(out: Dict[str, Any]) -> str:
    return json.dumps(out, indent=2)


def _frame(rows: List[Dict[str, Any]], columns: Optional[List[str]] = None) -> pd.DataFrame:
    df = pd.DataFrame(rows or [])
    if columns and not df.empty:
        df = df[[c for c in columns if c in df.columns]]
    return df


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


# Log tailing for UI
def ui_tail_logs(n_lines: int = LOG_TAIL_LINES) -> str:
    lines = tail_log_lines(int(n_lines))
    if not lines:
        return f"[log] no log output at {log_file_path()}"
    return "\n".join(lines)


# Chat UI functions
def ui_chat(message: str, is_voice: bool, history):
    message = (message or "").strip()
    if not message:
        return history, pd.DataFrame(), ""

    out = _post(
        "/api/chat",
        payload={"message": message, "is_voice_input": bool(is_voice), "session_id": UI_SESSION_ID},
    )
    answer = out.get("response") or out.get("error") or ""

    history = (history or []) + [
        {"role": "user", "content": message},
        {"role": "assistant", "content": answer},
    ]
    return history, _frame(out.get("products"), PRODUCT_COLUMNS), out.get("intent") or ""


def ui_clear_chat():
    _delete("/api/chat/history", params={"session_id": UI_SESSION_ID})
    return [], pd.DataFrame(), ""


# Search UI functions
def ui_search(
    query_text: str,
    max_results: int,
    category: str,
    brand: str,
    min_price: Any,
    max_price: Any,
    in_stock_only: bool,
) -> Tuple[pd.DataFrame, str]:
    query_text = (query_text or "").strip()
    if not query_text:
        return pd.DataFrame([{"error": "query must not be empty"}]), ""

    payload = {
        "query": query_text,
        "max_results": int(max_results),
        "category": (category or "").strip() or None,
        "brand": (brand or "").strip() or None,
        "min_price": _optional_float(min_price),
        "max_price": _optional_float(max_price),
        "in_stock_only": bool(in_stock_only),
    }
    out = _post("/api/search", payload=payload)
    if "error" in out:
        return pd.DataFrame([{"error": out["error"]}]), ""

    meta = {
        "search_terms": out.get("search_terms"),
        "filters": out.get("filters"),
        "total_found": out.get("total_found"),
        "suggestions": out.get("suggestions"),
    }
    return _frame(out.get("products"), PRODUCT_COLUMNS), _pretty(meta)


# Inventory UI functions
def ui_update_stock(product_id: str, quantity: Any, update_embedding: bool) -> str:
    product_id = (product_id or "").strip()
    if not product_id:
        return _pretty({"error": "product_id required"})
    payload = {
        "product_id": product_id,
        "quantity": int(quantity or 0),
        "update_embedding": bool(update_embedding),
    }
    return _pretty(_post("/api/inventory/update", payload=payload))


def ui_low_stock(threshold: Any) -> pd.DataFrame:
    out = _get("/api/inventory/check", params={"threshold": int(threshold)})
    return _frame(out.get("low_stock_products"))


def ui_report(include_ai: bool) -> Tuple[str, pd.DataFrame, pd.DataFrame]:
    out = _get("/api/inventory/report", params={"include_ai": bool(include_ai)})
    summary = {
        "stats": out.get("stats"),
        "recommendations": out.get("recommendations"),
        "error": out.get("error"),
    }
    return _pretty(summary), _frame(out.get("low_stock_products")), _frame(out.get("out_of_stock_products"))


def ui_maintenance() -> str:
    return _pretty(_post("/api/inventory/maintenance", payload={}))


# Embedding UI functions
def ui_sync(mode: str, batch_size: Any, delay: Any, background: bool) -> str:
    payload = {
        "mode": mode or "full",
        "batch_size": int(batch_size),
        "inter_batch_delay": float(delay),
        "background": bool(background),
    }
    return _pretty(_post("/api/embeddings/sync", payload=payload))


def ui_jobs() -> pd.DataFrame:
    out = _get("/api/embeddings/jobs", params={"limit": 50})
    return _frame(out.get("jobs"))


# Catalog UI functions
def ui_products(page: Any, category: str, active_only: bool) -> Tuple[pd.DataFrame, str]:
    params: Dict[str, Any] = {"page": int(page or 1), "limit": 50}
    if (category or "").strip():
        params["category"] = category.strip()
    if active_only:
        params["is_active"] = True
    out = _get("/api/products", params=params)
    columns = ["id", "name", "sku", "price", "quantity", "category", "brand", "is_active", "has_embedding"]
    return _frame(out.get("products"), columns), _pretty(out.get("pagination") or out)


def ui_stats() -> str:
    return _pretty(_get("/api/products/stats"))


def ui_deep_health(run_chat: bool) -> str:
    return _pretty(_get("/health/deep", params={"run_chat": bool(run_chat)}))


# Build Gradio UI
def build_gradio_app(api_base_url: str = API_BASE_URL) -> gr.Blocks:
    global API_BASE_URL
    API_BASE_URL = api_base_url.rstrip("/")

    with gr.Blocks(title="Shop Assistant UI", analytics_enabled=False) as demo:
        gr.Markdown(f"# Shop Assistant\n**API:** `{API_BASE_URL}`  **Log file:** `{log_file_path()}`")

        with gr.Tab("Chat"):
            chatbot = gr.Chatbot(label="Assistant", height=420)
            with gr.Row():
                message = gr.Textbox(label="Message", placeholder="Show me running shoes under $100", scale=4)
                is_voice = gr.Checkbox(value=False, label="Voice transcript")
            with gr.Row():
                send_btn = gr.Button("Send", variant="primary")
                clear_btn = gr.Button("Clear history")
            intent_box = gr.Textbox(label="Detected intent", interactive=False)
            chat_products = gr.Dataframe(label="Products", interactive=False)

            send_btn.click(
                fn=ui_chat,
                inputs=[message, is_voice, chatbot],
                outputs=[chatbot, chat_products, intent_box],
            ).then(lambda: "", outputs=[message])
            clear_btn.click(fn=ui_clear_chat, outputs=[chatbot, chat_products, intent_box])

        with gr.Tab("Search"):
            s_query = gr.Textbox(label="Query", placeholder="wireless headphones between $50 and $150")
            with gr.Row():
                s_max = gr.Slider(1, 20, value=10, step=1, label="max_results")
                s_stock = gr.Checkbox(value=True, label="In stock only")
            with gr.Row():
                s_category = gr.Textbox(label="Category (optional)")
                s_brand = gr.Textbox(label="Brand (optional)")
                s_min = gr.Number(label="Min price", value=None)
                s_max_price = gr.Number(label="Max price", value=None)
            s_btn = gr.Button("Search")
            s_results = gr.Dataframe(label="Results", interactive=False)
            s_meta = gr.Code(label="Search details", language="json")
            s_btn.click(
                fn=ui_search,
                inputs=[s_query, s_max, s_category, s_brand, s_min, s_max_price, s_stock],
                outputs=[s_results, s_meta],
            )

        with gr.Tab("Inventory"):
            gr.Markdown("### Set stock level")
            with gr.Row():
                i_product = gr.Textbox(label="product_id")
                i_qty = gr.Number(label="quantity", value=0, precision=0)
                i_embed = gr.Checkbox(value=True, label="Reconcile embedding")
                i_btn = gr.Button("Update")
            i_out = gr.Code(label="Update result", language="json")
            i_btn.click(fn=ui_update_stock, inputs=[i_product, i_qty, i_embed], outputs=[i_out])

            gr.Markdown("### Low stock")
            with gr.Row():
                i_threshold = gr.Number(label="threshold", value=5, precision=0)
                i_low_btn = gr.Button("Check")
            i_low = gr.Dataframe(label="Low stock products", interactive=False)
            i_low_btn.click(fn=ui_low_stock, inputs=[i_threshold], outputs=[i_low])

            gr.Markdown("### Report and maintenance")
            with gr.Row():
                r_ai = gr.Checkbox(value=False, label="Include AI recommendations")
                r_btn = gr.Button("Generate report")
                m_btn = gr.Button("Run low-stock maintenance")
            r_summary = gr.Code(label="Report", language="json")
            r_low = gr.Dataframe(label="Low stock", interactive=False)
            r_out = gr.Dataframe(label="Out of stock", interactive=False)
            r_btn.click(fn=ui_report, inputs=[r_ai], outputs=[r_summary, r_low, r_out])
            m_btn.click(fn=ui_maintenance, outputs=[r_summary])

        with gr.Tab("Embeddings"):
            with gr.Row():
                e_mode = gr.Radio(["full", "incremental"], value="incremental", label="mode")
                e_batch = gr.Slider(1, 50, value=5, step=1, label="batch_size")
                e_delay = gr.Slider(0.0, 10.0, value=1.0, step=0.5, label="inter_batch_delay (s)")
                e_bg = gr.Checkbox(value=True, label="Run in background")
            e_btn = gr.Button("Start sync")
            e_out = gr.Code(label="Sync response", language="json")
            e_btn.click(fn=ui_sync, inputs=[e_mode, e_batch, e_delay, e_bg], outputs=[e_out])

            e_jobs_btn = gr.Button("Refresh jobs")
            e_jobs = gr.Dataframe(label="Embedding jobs", interactive=False)
            e_jobs_btn.click(fn=ui_jobs, outputs=[e_jobs])

        with gr.Tab("Catalog"):
            with gr.Row():
                c_page = gr.Number(label="page", value=1, precision=0)
                c_category = gr.Textbox(label="category (optional)")
                c_active = gr.Checkbox(value=True, label="Active only")
                c_btn = gr.Button("Load products")
            c_products = gr.Dataframe(label="Products", interactive=False)
            c_pagination = gr.Code(label="Pagination", language="json")
            c_btn.click(fn=ui_products, inputs=[c_page, c_category, c_active], outputs=[c_products, c_pagination])

            with gr.Row():
                c_stats_btn = gr.Button("Catalog stats")
                c_chat_ping = gr.Checkbox(value=False, label="Ping chat model")
                c_health_btn = gr.Button("Deep health")
            c_stats = gr.Code(label="Output", language="json")
            c_stats_btn.click(fn=ui_stats, outputs=[c_stats])
            c_health_btn.click(fn=ui_deep_health, inputs=[c_chat_ping], outputs=[c_stats])

        with gr.Tab("Logs"):
            with gr.Row():
                tail_lines = gr.Slider(50, 2000, value=LOG_TAIL_LINES, step=50, label="Tail lines")
                refresh_logs_btn = gr.Button("Refresh logs")
            log_view = gr.Textbox(label="Logs", value="", lines=25, interactive=False)
            refresh_logs_btn.click(fn=ui_tail_logs, inputs=[tail_lines], outputs=[log_view])

            timer = gr.Timer(value=3.0)
            timer.tick(fn=ui_tail_logs, inputs=[tail_lines], outputs=[log_view])

    return demo


if __name__ == "__main__":
    import threading

    import uvicorn

    API_HOST = os.getenv("SHOP_API_HOST", "127.0.0.1")
    API_PORT = int(os.getenv("SHOP_API_PORT", "8000"))

    UI_HOST = os.getenv("SHOP_UI_HOST", "127.0.0.1")
    UI_PORT = int(os.getenv("SHOP_UI_PORT", "7860"))

    def run_api() -> None:
        uvicorn.run("api.main:app", host=API_HOST, port=API_PORT, log_level="info", reload=False)

    os.environ.setdefault("SHOP_MOUNT_UI", "0")
    api_thread = threading.Thread(target=run_api, daemon=True)
    api_thread.start()

    demo = build_gradio_app(f"http://{API_HOST}:{API_PORT}")
    demo.launch(server_name=UI_HOST, server_port=UI_PORT)
