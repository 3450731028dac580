"""Diagnostic HTML page served on GET without a body.

Lets an operator submit a sample cargo record from a browser and see the
relay's JSON envelope.
"""

from __future__ import annotations

_PAGE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Webhook Test Page - Cargo Information</title>
    <style>
        body { font-family: Arial, sans-serif; padding: 20px; }
        .container { max-width: 800px; margin: 0 auto; }
        .status { padding: 10px; margin: 10px 0; border-radius: 5px; }
        .success { background: #d4edda; color: #155724; }
        .warning { background: #fff3cd; color: #856404; }
        .test-form { background: #f8f9fa; padding: 20px; border-radius: 10px; }
        label { display: inline-block; min-width: 120px; }
    </style>
</head>
<body>
    <div class="container">
        <h1>Cargo information webhook - test page</h1>

        <div class="status __STATUS_CLASS__">
            <strong>Status:</strong> __STATUS_TEXT__
        </div>

        <div class="test-form">
            <h2>Send a test submission</h2>
            <form id="testForm">
                <div>
                    <label for="cargoType">Cargo type:</label>
                    <select id="cargoType">
                        <option value="valuable_metals">Metals and jewellery</option>
                        <option value="fragile_items">Fragile items</option>
                        <option value="snacks_food">Food</option>
                        <option value="clothes_accessories">Clothing</option>
                    </select>
                </div>
                <div>
                    <label for="weight">Weight (kg):</label>
                    <input type="number" id="weight" value="2.5" step="0.1" min="0.1" max="30">
                </div>
                <div>
                    <label for="value">Value:</label>
                    <input type="number" id="value" value="15000000">
                    <select id="currency">
                        <option value="IRR">IRR</option>
                        <option value="USD">USD</option>
                        <option value="EUR">EUR</option>
                    </select>
                </div>
                <button type="button" onclick="testWebhook()">Send</button>
            </form>
            <div id="testResult"></div>
        </div>
    </div>

    <script>
        const SYMBOLS = { IRR: 'Rial', USD: '$', EUR: '\\u20ac' };

        async function testWebhook() {
            const type = document.getElementById('cargoType');
            const weight = parseFloat(document.getElementById('weight').value);
            const amount = parseFloat(document.getElementById('value').value);
            const currency = document.getElementById('currency').value;
            const data = {
                action: 'cargo_info_submitted',
                timestamp: new Date().toISOString(),
                cargo_info: {
                    type: {
                        id: type.value,
                        name: type.selectedOptions[0].text,
                        description: 'manual test',
                        risk_level: 'medium'
                    },
                    weight: { kg: weight, grams: Math.round(weight * 1000), display: weight + ' kg' },
                    value: {
                        amount: amount,
                        currency: currency,
                        currency_symbol: SYMBOLS[currency],
                        formatted: amount + ' ' + SYMBOLS[currency]
                    },
                    insurance_required: true
                },
                telegram_user: { telegram_id: 123456789, telegram_username: 'testuser' },
                source: 'web_test',
                ip_address: '127.0.0.1'
            };

            try {
                const response = await fetch('__SUBMIT_PATH__', {
                    method: 'POST',
                    headers: { 'Content-Type': 'application/json' },
                    body: JSON.stringify(data)
                });
                const result = await response.json();
                document.getElementById('testResult').innerHTML =
                    '<pre>' + JSON.stringify(result, null, 2) + '</pre>';
            } catch (error) {
                document.getElementById('testResult').textContent = 'Error: ' + error.message;
            }
        }
    </script>
</body>
</html>
"""


def render_diagnostic_page(submit_path: str, *, webhook_configured: bool) -> str:
    if webhook_configured:
        status_class, status_text = "success", "Webhook relay is running"
    else:
        status_class = "warning"
        status_text = "Webhook relay is running, destination URL not configured"
    return (
        _PAGE.replace("__SUBMIT_PATH__", submit_path)
        .replace("__STATUS_CLASS__", status_class)
        .replace("__STATUS_TEXT__", status_text)
    )
