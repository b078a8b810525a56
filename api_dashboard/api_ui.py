from __future__ import annotations

API_UI_HTML = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>API Dashboard</title>
  <style>
    :root {
      --bg: #f5f7fb;
      --panel: #ffffff;
      --text: #162334;
      --muted: #5d6f84;
      --border: #d6dce5;
      --accent: #1653b5;
      --ok: #0f7a42;
      --warn: #9a5b00;
      --err: #b82727;
    }

    * {
      box-sizing: border-box;
    }

    body {
      margin: 0;
      padding: 1.25rem;
      background: var(--bg);
      color: var(--text);
      font-family: "IBM Plex Sans", "Segoe UI", Arial, sans-serif;
      line-height: 1.45;
    }

    .wrap {
      max-width: 1200px;
      margin: 0 auto;
      display: grid;
      gap: 1rem;
    }

    .grid {
      display: grid;
      grid-template-columns: minmax(320px, 1fr) minmax(320px, 1fr);
      gap: 1rem;
      align-items: start;
    }

    .panel {
      background: var(--panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 0.95rem;
    }

    .panel h2 {
      margin: 0 0 0.7rem;
      font-size: 1.02rem;
    }

    .row {
      display: grid;
      grid-template-columns: 120px 1fr;
      gap: 0.55rem;
      margin-bottom: 0.55rem;
    }

    input,
    select,
    textarea,
    button {
      font: inherit;
    }

    input,
    select,
    textarea {
      width: 100%;
      border: 1px solid var(--border);
      border-radius: 8px;
      padding: 0.5rem 0.6rem;
    }

    textarea {
      min-height: 110px;
      font-family: "IBM Plex Mono", "Menlo", "Consolas", monospace;
      font-size: 0.88rem;
      margin-bottom: 0.55rem;
    }

    button {
      border: 1px solid transparent;
      border-radius: 8px;
      padding: 0.5rem 0.8rem;
      background: #ebf0f7;
      cursor: pointer;
    }

    button.primary {
      background: var(--accent);
      color: #fff;
    }

    .status {
      font-weight: 700;
      padding: 0.45rem 0.55rem;
      border-radius: 8px;
      margin-bottom: 0.7rem;
      background: #eef3f9;
    }

    .status.ok { color: var(--ok); }
    .status.warn { color: var(--warn); }
    .status.err { color: var(--err); }

    pre {
      margin: 0;
      padding: 0.55rem;
      background: #f8fafc;
      overflow: auto;
      white-space: pre-wrap;
      word-break: break-word;
      max-height: 360px;
    }

    table {
      width: 100%;
      border-collapse: collapse;
      font-size: 0.88rem;
    }

    td, th {
      text-align: left;
      padding: 0.35rem;
      border-bottom: 1px solid var(--border);
      word-break: break-all;
    }

    @media (max-width: 920px) {
      .grid {
        grid-template-columns: 1fr;
      }
    }
  </style>
</head>
<body>
  <div class="wrap">
    <section class="panel" id="authPanel">
      <h2>Account</h2>
      <div class="row"><label for="name">Name</label><input id="name" placeholder="Register only"></div>
      <div class="row"><label for="email">Email</label><input id="email" type="email"></div>
      <div class="row"><label for="password">Password</label><input id="password" type="password"></div>
      <button class="primary" id="loginBtn">Log in</button>
      <button id="registerBtn">Register</button>
      <button id="logoutBtn">Log out</button>
      <span id="whoami"></span>
    </section>

    <div class="grid">
      <section class="panel">
        <h2>Request</h2>
        <input type="hidden" id="editId">
        <div class="row">
          <select id="method">
            <option>GET</option><option>POST</option><option>PUT</option><option>PATCH</option><option>DELETE</option>
          </select>
          <input id="url" placeholder="https://example.com/api">
        </div>
        <label for="headers">Headers (JSON object)</label>
        <textarea id="headers">{}</textarea>
        <label for="body">Body (JSON)</label>
        <textarea id="body"></textarea>
        <button class="primary" id="sendBtn">Send Request</button>
        <button id="saveBtn">Save Edit</button>
      </section>

      <section class="panel">
        <h2>Response</h2>
        <div class="status" id="statusLine">No request sent yet.</div>
        <pre id="responseBody"></pre>
      </section>
    </div>

    <section class="panel">
      <h2>History</h2>
      <table>
        <thead><tr><th>Method</th><th>URL</th><th>Status</th><th>Time (ms)</th><th>Created</th><th></th></tr></thead>
        <tbody id="history"></tbody>
      </table>
    </section>
  </div>

  <script>
    (function () {
      const el = (id) => document.getElementById(id);
      let token = window.localStorage.getItem("apiDashboardToken") || "";

      function setStatus(text, kind) {
        el("statusLine").textContent = text;
        el("statusLine").className = "status " + (kind || "");
      }

      async function call(method, path, payload) {
        const headers = { "Content-Type": "application/json" };
        if (token) {
          headers["Authorization"] = "Bearer " + token;
        }
        const response = await fetch(path, {
          method: method,
          headers: headers,
          body: payload === undefined ? undefined : JSON.stringify(payload)
        });
        const data = await response.json().catch(() => ({}));
        if (!response.ok) {
          const errors = (data.errors || []).join(" ");
          throw new Error((data.detail || response.statusText) + (errors ? " " + errors : ""));
        }
        return data;
      }

      function remember(data) {
        token = data.token;
        window.localStorage.setItem("apiDashboardToken", token);
        el("whoami").textContent = data.user.email;
        loadHistory();
      }

      function requestPayload() {
        return {
          method: el("method").value,
          url: el("url").value,
          headers: el("headers").value,
          body: el("body").value
        };
      }

      async function loadHistory() {
        const tbody = el("history");
        tbody.innerHTML = "";
        if (!token) {
          return;
        }
        try {
          const data = await call("GET", "/request/history");
          data.items.forEach((item) => {
            const row = document.createElement("tr");
            [item.method, item.url, item.status_code, item.response_time_ms, item.created_at].forEach((value) => {
              const cell = document.createElement("td");
              cell.textContent = String(value);
              row.appendChild(cell);
            });
            const actions = document.createElement("td");
            const edit = document.createElement("button");
            edit.textContent = "Edit";
            edit.onclick = () => {
              el("editId").value = item.id;
              el("method").value = item.method;
              el("url").value = item.url;
              el("headers").value = JSON.stringify(item.headers || {}, null, 2);
              // String bodies are stored as their JSON text, so they are shown verbatim.
              el("body").value = item.body === null
                ? ""
                : typeof item.body === "string" ? item.body : JSON.stringify(item.body, null, 2);
            };
            const remove = document.createElement("button");
            remove.textContent = "Delete";
            remove.onclick = async () => {
              await call("POST", "/request/history/delete", { id: item.id });
              loadHistory();
            };
            actions.appendChild(edit);
            actions.appendChild(remove);
            row.appendChild(actions);
            tbody.appendChild(row);
          });
        } catch (err) {
          setStatus(err.message, "err");
        }
      }

      el("loginBtn").onclick = async () => {
        try {
          remember(await call("POST", "/auth/login", { email: el("email").value, password: el("password").value }));
        } catch (err) {
          setStatus(err.message, "err");
        }
      };

      el("registerBtn").onclick = async () => {
        try {
          remember(await call("POST", "/auth/register", {
            name: el("name").value,
            email: el("email").value,
            password: el("password").value
          }));
        } catch (err) {
          setStatus(err.message, "err");
        }
      };

      el("logoutBtn").onclick = () => {
        token = "";
        window.localStorage.removeItem("apiDashboardToken");
        el("whoami").textContent = "";
        loadHistory();
      };

      el("sendBtn").onclick = async () => {
        setStatus("Sending...", "");
        try {
          const result = await call("POST", "/request/send", requestPayload());
          const kind = result.status_code === 0 ? "err" : (result.status_code < 400 ? "ok" : "warn");
          setStatus("Status " + result.status_code + " in " + result.response_time_ms + " ms", kind);
          el("responseBody").textContent = typeof result.response_data === "string"
            ? result.response_data
            : JSON.stringify(result.response_data, null, 2);
          loadHistory();
        } catch (err) {
          setStatus(err.message, "err");
        }
      };

      el("saveBtn").onclick = async () => {
        const id = Number(el("editId").value);
        if (!id) {
          setStatus("Pick a history entry to edit first.", "warn");
          return;
        }
        try {
          await call("POST", "/request/history/update", Object.assign({ id: id }, requestPayload()));
          setStatus("Request updated", "ok");
          loadHistory();
        } catch (err) {
          setStatus(err.message, "err");
        }
      };

      if (token) {
        call("GET", "/auth/me")
          .then((data) => {
            el("whoami").textContent = data.user.email;
            loadHistory();
          })
          .catch(() => el("logoutBtn").onclick());
      }
    })();
  </script>
</body>
</html>
"""
