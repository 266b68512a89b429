#!/usr/bin/env python3
"""
totpgen Web Display Example - Server

Serves a page that asks for a Base32 secret or otpauth:// URI and shows
the current code with a countdown, polling TotpRouter once per second.
The secret stays in the browser tab; the server keeps nothing.

Usage:
    pip install "totpgen[fastapi]" uvicorn
    uvicorn server:app

Then open http://localhost:8000 in your browser.
"""

from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from totpgen.integrations import TotpRouter

app = FastAPI(title="totpgen Web Display Demo")
app.include_router(TotpRouter().router)


@app.get("/", response_class=HTMLResponse)
async def index():
    """Serve the demo HTML page."""
    return """
<!DOCTYPE html>
<html>
<head>
    <title>TOTP Generator</title>
    <style>
        body { font-family: system-ui, sans-serif; max-width: 480px; margin: 2rem auto; padding: 0 1rem; }
        input { width: 100%; padding: 0.5rem; box-sizing: border-box; }
        #code { font-size: 3rem; letter-spacing: 0.3rem; margin: 1rem 0; }
        .error { color: #b00020; }
    </style>
</head>
<body>
    <h1>TOTP Generator</h1>
    <input id="secret" placeholder="Base32 secret or otpauth:// URI">
    <div id="code">------</div>
    <div id="remaining"></div>
    <div id="error" class="error"></div>
    <script>
        async function refresh() {
            const text = document.getElementById('secret').value.trim();
            if (!text) return;
            const body = text.startsWith('otpauth:') ? {uri: text} : {secret: text};
            const resp = await fetch('/totp/code', {
                method: 'POST',
                headers: {'Content-Type': 'application/json'},
                body: JSON.stringify(body),
            });
            const data = await resp.json();
            if (resp.ok) {
                document.getElementById('code').textContent = data.code;
                document.getElementById('remaining').textContent = data.seconds_remaining + 's remaining';
                document.getElementById('error').textContent = '';
            } else {
                document.getElementById('error').textContent = data.detail.message || 'Invalid input';
            }
        }
        setInterval(refresh, 1000);
    </script>
</body>
</html>
"""
